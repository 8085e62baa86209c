"""
LayoutManager - runs style-driven layouts when a document changes.

A container opts into a stack layout through its style
(`childLayout=stackLayout`); the remaining stack keys configure it, seeded
from a named preset when `stackPreset` is set.

Usage:
    manager = LayoutManager(document)

    # After cells were added, removed or resized
    manager.execute_layouts(["a", "b"])

    # While a cell is dragged inside a stack
    manager.cells_moved(["a"], x=120, y=40)
"""

import logging
from typing import Dict, Iterable, List, Optional

from stacklayout.core.document import Cell, DocumentModel
from stacklayout.layout.engines import get_engine
from stacklayout.layout.engines.base import GraphLayout
from stacklayout.layout.presets import get_preset
from stacklayout.managers.transaction_manager import TransactionManager
from stacklayout.models import style as st
from stacklayout.models.layout_config import LayoutConfig

logger = logging.getLogger(__name__)

# Style value of childLayout -> registered engine name
LAYOUT_ENGINES: Dict[str, str] = {
    st.STACK_LAYOUT: "stack",
}


class LayoutManager:
    """Dispatches layouts for a document.

    All layouts created by the manager share its TransactionManager, so the
    layouts triggered by one change run inside one edit batch.
    """

    def __init__(
        self,
        document: DocumentModel,
        transactions: Optional[TransactionManager] = None,
    ):
        """
        Initialize layout manager.

        Args:
            document: Document whose containers are laid out
            transactions: Batch manager (created if not provided)
        """
        self.document = document
        self.transactions = transactions or TransactionManager(document)

    def get_layout(self, cell: Optional[Cell]) -> Optional[GraphLayout]:
        """
        Return the layout configured by the style of cell.

        Args:
            cell: Container cell

        Returns:
            Configured layout, or None when the style requests no layout

        Raises:
            PresetNotFoundError: If the style names an unknown preset
        """
        if cell is None:
            return None

        style = self.document.get_style(cell)
        engine_name = LAYOUT_ENGINES.get(st.get_value(style, st.STYLE_CHILD_LAYOUT))
        if engine_name is None:
            return None

        preset_name = st.get_value(style, st.STYLE_STACK_PRESET)
        base = get_preset(preset_name) if preset_name else None
        config = LayoutConfig.from_style(style, base=base)

        return get_engine(engine_name)(self.document, config, self.transactions)

    def get_cells_to_layout(self, cells: Iterable[Cell]) -> List[Cell]:
        """
        Containers affected by changes to cells, deepest first.

        Each changed cell contributes itself (its own children may need a new
        arrangement) and every ancestor with a layout, since resizing a
        child can resize its parent in turn.
        """
        depths: Dict[Cell, int] = {}

        for cell in cells:
            if cell is None or not self.document.contains(cell):
                continue

            chain: List[Cell] = []
            current: Optional[Cell] = cell
            while current is not None:
                chain.append(current)
                current = self.document.get_parent(current)

            # chain runs from cell up to the root
            depth_of_cell = len(chain) - 1
            for offset, candidate in enumerate(chain):
                if candidate in depths:
                    continue
                if self.get_layout(candidate) is not None:
                    depths[candidate] = depth_of_cell - offset

        return sorted(depths, key=lambda c: depths[c], reverse=True)

    def execute_layouts(self, cells: Iterable[Cell]) -> List[Cell]:
        """
        Run the layouts affected by changes to cells in one edit batch.

        Returns:
            Containers that were laid out, in execution order
        """
        targets = self.get_cells_to_layout(cells)
        if not targets:
            return []

        with self.transactions.batch({"operation": "execute_layouts"}):
            for container in targets:
                layout = self.get_layout(container)
                logger.debug(f"Running {layout.name} layout on {container!r}")
                layout.execute(container)

        logger.info(f"Executed {len(targets)} layouts")
        return targets

    def cells_moved(self, cells: Iterable[Cell], x: float, y: float) -> None:
        """
        Forward a drag of cells to the layouts of their parents.

        Args:
            cells: Dragged cells
            x: Screen x of the drop point
            y: Screen y of the drop point
        """
        with self.transactions.batch({"operation": "cells_moved"}):
            for cell in cells:
                if cell is None or not self.document.contains(cell):
                    continue
                layout = self.get_layout(self.document.get_parent(cell))
                if layout is not None:
                    layout.move_cell(cell, x, y)
