"""Tests for LayoutConfig validation and style mapping."""

import pytest
from pydantic import ValidationError

from stacklayout.models.layout_config import LayoutConfig


class TestLayoutConfigDefaults:
    """Test default values and normalisation."""

    def test_defaults(self):
        config = LayoutConfig()
        assert config.horizontal is True
        assert config.spacing == 0
        assert config.border_collapse is True
        assert config.wrap is None
        assert config.grid_size == 0
        assert not (config.fill or config.resize_parent or config.resize_last)

    def test_vertical(self):
        assert LayoutConfig(orientation="vertical").horizontal is False

    def test_unknown_orientation_rejected(self):
        with pytest.raises(ValidationError):
            LayoutConfig(orientation="diagonal")

    def test_unknown_field_rejected(self):
        """Typos in field names fail loudly."""
        with pytest.raises(ValidationError):
            LayoutConfig(spaceing=5)

    @pytest.mark.parametrize("wrap", [0, -10])
    def test_non_positive_wrap_disables_wrapping(self, wrap):
        assert LayoutConfig(wrap=wrap).wrap is None

    def test_wrap_normalised_on_assignment(self):
        config = LayoutConfig(wrap=100)
        assert config.wrap == 100

        config.wrap = -1
        assert config.wrap is None

    def test_negative_grid_disables_snapping(self):
        config = LayoutConfig(grid_size=-4)
        assert config.grid_size == 0


class TestFromStyle:
    """Test building a config from container styles."""

    def test_empty_style(self):
        assert LayoutConfig.from_style(None) == LayoutConfig()
        assert LayoutConfig.from_style({}) == LayoutConfig()

    def test_stack_keys(self):
        style = {
            "childLayout": "stackLayout",
            "horizontalStack": "0",
            "stackSpacing": "6",
            "stackBorder": "2",
            "stackFill": "1",
            "stackUnitSize": "10",
            "stackWrap": "200",
            "resizeParent": "1",
            "resizeParentMax": "1",
            "resizeLast": "0",
            "allowGaps": "1",
            "marginLeft": "3",
            "marginTop": 4,
        }
        config = LayoutConfig.from_style(style)

        assert config.orientation == "vertical"
        assert config.spacing == 6
        assert config.border == 2
        assert config.fill is True
        assert config.grid_size == 10
        assert config.wrap == 200
        assert config.resize_parent is True
        assert config.resize_parent_max is True
        assert config.resize_last is False
        assert config.allow_gaps is True
        assert config.margin_left == 3
        assert config.margin_top == 4
        assert config.margin_right == 0

    def test_base_supplies_missing_keys(self):
        """Keys absent from the style keep the base value."""
        base = LayoutConfig(orientation="vertical", spacing=8, fill=True, keep_first_location=True)
        config = LayoutConfig.from_style({"stackSpacing": "2"}, base=base)

        assert config.orientation == "vertical"
        assert config.spacing == 2
        assert config.fill is True
        assert config.keep_first_location is True
        assert base.spacing == 8

    def test_unparseable_number_falls_back(self):
        config = LayoutConfig.from_style({"stackSpacing": "wide"})
        assert config.spacing == 0
