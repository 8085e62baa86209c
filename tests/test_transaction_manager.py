"""
Test suite for TransactionManager.

Tests cover:
- Batch lifecycle (begin, commit, rollback)
- Joining nested batches
- Rollback of geometry writes and reorders
- Error handling
"""

import pytest

from stacklayout.core.graph_document import GraphDocument
from stacklayout.managers.transaction_manager import (
    CommitResult,
    OperationExecutionError,
    StructuralDiff,
    TransactionAlreadyActive,
    TransactionError,
    TransactionManager,
    TransactionNotActive,
    TransactionStatus,
)
from stacklayout.models.geometry import Geometry


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def doc():
    document = GraphDocument()
    layer = document.add_layer("layer")
    for i, name in enumerate(["a", "b", "c"]):
        document.insert(layer, name, Geometry(x=i * 10, y=0, width=10, height=10))
    return document


@pytest.fixture
def tx_mgr(doc):
    return TransactionManager(doc)


# ============================================================================
# Data Structures
# ============================================================================

def test_structural_diff_is_empty():
    """Test StructuralDiff.is_empty() method."""
    diff = StructuralDiff()
    assert diff.is_empty()

    diff.modified.append("a")
    assert not diff.is_empty()

    diff2 = StructuralDiff()
    diff2.reordered.append("b")
    assert not diff2.is_empty()


def test_transaction_status_enum():
    assert TransactionStatus.ACTIVE.value == "active"
    assert TransactionStatus.COMMITTED.value == "committed"
    assert TransactionStatus.ROLLED_BACK.value == "rolled_back"


def test_exception_hierarchy():
    assert issubclass(TransactionAlreadyActive, TransactionError)
    assert issubclass(TransactionNotActive, TransactionError)
    assert issubclass(OperationExecutionError, TransactionError)


# ============================================================================
# Lifecycle
# ============================================================================

class TestBatch:
    """Test scoped batches."""

    def test_commit_on_exit(self, doc, tx_mgr):
        with tx_mgr.batch() as txn:
            txn.set_geometry("a", Geometry(x=5, y=5, width=10, height=10))
            txn.move_child("layer", "c", 0)
            assert tx_mgr.active is txn

        assert txn.status == TransactionStatus.COMMITTED
        assert tx_mgr.active is None

        result = tx_mgr.last_result
        assert isinstance(result, CommitResult)
        assert result.transaction_id == txn.id
        assert result.operations_applied == 2
        assert result.diff.modified == ["a"]
        assert result.diff.reordered == ["c"]

        assert doc.get_geometry("a").x == 5
        assert doc.get_children("layer") == ["c", "a", "b"]

    def test_nested_batches_join(self, tx_mgr):
        """An inner batch reuses the outer transaction; one commit at the end."""
        with tx_mgr.batch() as outer:
            outer.set_geometry("a", Geometry(x=1))
            with tx_mgr.batch() as inner:
                assert inner is outer
                assert inner.depth == 2
                inner.set_geometry("b", Geometry(x=2))
            assert outer.depth == 1
            assert outer.status == TransactionStatus.ACTIVE
            assert tx_mgr.last_result is None

        assert tx_mgr.last_result.operations_applied == 2

    def test_empty_batch_commits(self, tx_mgr):
        with tx_mgr.batch():
            pass
        assert tx_mgr.last_result.operations_applied == 0
        assert tx_mgr.last_result.diff.is_empty()

    def test_metadata(self, tx_mgr):
        with tx_mgr.batch({"layout": "stack"}) as txn:
            assert txn.metadata == {"layout": "stack"}


class TestRollback:
    """Test that failures undo the whole batch."""

    def test_exception_rolls_back(self, doc, tx_mgr):
        with pytest.raises(RuntimeError):
            with tx_mgr.batch() as txn:
                txn.move_child("layer", "c", 0)
                txn.set_geometry("a", Geometry(x=99, y=99, width=1, height=1))
                txn.set_geometry("a", Geometry(x=50, y=50, width=1, height=1))
                raise RuntimeError("boom")

        assert txn.status == TransactionStatus.ROLLED_BACK
        assert tx_mgr.active is None
        assert tx_mgr.last_result is None
        assert doc.get_children("layer") == ["a", "b", "c"]
        assert doc.get_geometry("a").same_bounds(Geometry(x=0, y=0, width=10, height=10))

    def test_inner_exception_rolls_back_outer(self, doc, tx_mgr):
        with pytest.raises(ValueError):
            with tx_mgr.batch() as outer:
                outer.set_geometry("a", Geometry(x=42))
                with tx_mgr.batch() as inner:
                    inner.set_geometry("b", Geometry(x=43))
                    raise ValueError("inner failure")

        assert doc.get_geometry("a").x == 0
        assert doc.get_geometry("b").x == 10

    def test_restores_missing_geometry(self, doc, tx_mgr):
        doc.insert("layer", "label")
        with pytest.raises(RuntimeError):
            with tx_mgr.batch() as txn:
                txn.set_geometry("label", Geometry(width=5))
                raise RuntimeError("boom")

        assert doc.get_geometry("label") is None


class TestErrors:
    """Test error handling."""

    def test_begin_twice(self, tx_mgr):
        tx_mgr.begin()
        with pytest.raises(TransactionAlreadyActive):
            tx_mgr.begin()

    def test_commit_twice(self, tx_mgr):
        txn = tx_mgr.begin()
        tx_mgr.commit(txn)
        with pytest.raises(TransactionNotActive):
            tx_mgr.commit(txn)

    def test_write_after_commit(self, tx_mgr):
        with tx_mgr.batch() as txn:
            pass
        with pytest.raises(TransactionNotActive):
            txn.set_geometry("a", Geometry())

    def test_failed_write(self, tx_mgr):
        """Document errors surface as OperationExecutionError and abort the batch."""
        with pytest.raises(OperationExecutionError) as exc_info:
            with tx_mgr.batch() as txn:
                txn.move_child("a", "layer", 0)

        assert "move_child" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None
        assert txn.status == TransactionStatus.ROLLED_BACK
        assert txn.operations[-1].success is False
        assert txn.operations[-1].error
