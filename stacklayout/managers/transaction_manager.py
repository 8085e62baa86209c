"""
TransactionManager - atomic edit batches for document mutations.

Groups the geometry writes and child reorders of one layout pass so that
observers see either the whole new arrangement or nothing.

Design decisions:
- Writes go to the document immediately; each one records the value it
  replaced so the batch can be undone in reverse order
- A batch opened while another is active joins it; only the outermost
  exit commits or rolls back
- Any exception escaping the batch rolls it back and is re-raised
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from stacklayout.core.document import Cell, DocumentModel
from stacklayout.models.geometry import Geometry

logger = logging.getLogger(__name__)


# ============================================================================
# Enums
# ============================================================================

class TransactionStatus(Enum):
    """Transaction lifecycle states."""
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class OperationRecord:
    """Record of a document mutation executed within a transaction."""
    operation: str                              # "set_geometry" or "move_child"
    cell: Cell
    params: Dict[str, Any]
    timestamp: datetime
    undo: Optional[Callable[[], None]] = None   # Restores the replaced value
    success: bool = False
    error: Optional[str] = None


@dataclass
class StructuralDiff:
    """Cells touched by a transaction."""
    modified: List[Cell] = field(default_factory=list)    # Geometry changed
    reordered: List[Cell] = field(default_factory=list)   # Sibling index changed

    def is_empty(self) -> bool:
        """Check if diff has any changes."""
        return not (self.modified or self.reordered)


@dataclass
class CommitResult:
    """Result of transaction commit."""
    transaction_id: str
    diff: StructuralDiff
    operations_applied: int


@dataclass
class Transaction:
    """An edit batch; all mutations of a layout pass go through it."""
    id: str
    manager: "TransactionManager"
    operations: List[OperationRecord] = field(default_factory=list)
    diff: StructuralDiff = field(default_factory=StructuralDiff)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: TransactionStatus = TransactionStatus.ACTIVE
    depth: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)

    def set_geometry(self, cell: Cell, geometry: Geometry) -> None:
        """Write geometry as the current geometry of cell."""
        self.manager.set_geometry(self, cell, geometry)

    def move_child(self, parent: Cell, cell: Cell, index: int) -> None:
        """Move cell to index among the children of parent."""
        self.manager.move_child(self, parent, cell, index)

    @property
    def write_count(self) -> int:
        return sum(1 for op in self.operations if op.success)


# ============================================================================
# Exceptions
# ============================================================================

class TransactionError(Exception):
    """Base exception for transaction errors."""
    pass


class TransactionAlreadyActive(TransactionError):
    """Document already has an active transaction."""
    pass


class TransactionNotActive(TransactionError):
    """Transaction is not in active state."""
    pass


class OperationExecutionError(TransactionError):
    """A document mutation failed."""
    pass


# ============================================================================
# TransactionManager
# ============================================================================

class TransactionManager:
    """
    Manages edit batches for one document.

    Usage:
        tx_mgr = TransactionManager(document)

        with tx_mgr.batch() as txn:
            txn.set_geometry(cell, geometry)
            txn.move_child(parent, cell, 0)

        result = tx_mgr.last_result
    """

    def __init__(self, document: DocumentModel):
        """
        Initialize transaction manager.

        Args:
            document: Document receiving the mutations
        """
        self.document = document
        self.last_result: Optional[CommitResult] = None
        self._active: Optional[Transaction] = None
        self._lock = threading.RLock()

    # ========================================================================
    # Public API
    # ========================================================================

    @property
    def active(self) -> Optional[Transaction]:
        return self._active

    @contextmanager
    def batch(self, metadata: Optional[Dict[str, Any]] = None) -> Iterator[Transaction]:
        """
        Scoped edit batch.

        Joins the active transaction when there is one. Otherwise begins a
        new one, commits it on normal exit and rolls it back when an
        exception escapes (the exception is re-raised).

        Args:
            metadata: Optional transaction metadata (ignored when joining)

        Yields:
            The active Transaction
        """
        with self._lock:
            if self._active is not None:
                joined = self._active
                joined.depth += 1
                try:
                    yield joined
                finally:
                    joined.depth -= 1
                return

            transaction = self.begin(metadata)
            try:
                yield transaction
            except Exception as e:
                logger.warning(f"Transaction {transaction.id} aborted: {e!r}")
                self.rollback(transaction)
                raise
            else:
                self.commit(transaction)

    def begin(self, metadata: Optional[Dict[str, Any]] = None) -> Transaction:
        """
        Begin a new transaction.

        Raises:
            TransactionAlreadyActive: If a transaction is already active
        """
        with self._lock:
            if self._active is not None:
                raise TransactionAlreadyActive(
                    f"Document already has active transaction {self._active.id}"
                )

            transaction = Transaction(
                id=str(uuid.uuid4()),
                manager=self,
                metadata=metadata or {},
            )
            self._active = transaction
            logger.debug(f"Transaction {transaction.id} started")
            return transaction

    def commit(self, transaction: Transaction) -> CommitResult:
        """
        Commit transaction; its writes become final.

        Raises:
            TransactionNotActive: If transaction is not active
        """
        with self._lock:
            self._require_active(transaction)
            transaction.status = TransactionStatus.COMMITTED
            self._active = None

            result = CommitResult(
                transaction_id=transaction.id,
                diff=transaction.diff,
                operations_applied=transaction.write_count,
            )
            self.last_result = result

            logger.info(
                f"Transaction {transaction.id} committed "
                f"({result.operations_applied} operations, "
                f"{len(result.diff.modified)} modified, "
                f"{len(result.diff.reordered)} reordered)"
            )
            return result

    def rollback(self, transaction: Transaction) -> None:
        """
        Rollback transaction, restoring every replaced value in reverse.

        Raises:
            TransactionNotActive: If transaction is not active
        """
        with self._lock:
            self._require_active(transaction)
            try:
                for op in reversed(transaction.operations):
                    if op.success and op.undo is not None:
                        op.undo()
            finally:
                transaction.status = TransactionStatus.ROLLED_BACK
                self._active = None

            logger.info(
                f"Transaction {transaction.id} rolled back "
                f"({transaction.write_count} operations discarded)"
            )

    # ========================================================================
    # Mutations
    # ========================================================================

    def set_geometry(self, transaction: Transaction, cell: Cell, geometry: Geometry) -> None:
        """
        Write geometry for cell within transaction.

        Raises:
            TransactionNotActive: If transaction is not active
            OperationExecutionError: If the document rejects the write
        """
        previous = self.document.get_geometry(cell)

        def execute() -> None:
            self.document.set_geometry(cell, geometry)

        def undo() -> None:
            self.document.set_geometry(cell, previous)

        self._apply(transaction, "set_geometry", cell, {"geometry": geometry.to_list()}, execute, undo)
        if cell not in transaction.diff.modified:
            transaction.diff.modified.append(cell)

    def move_child(self, transaction: Transaction, parent: Cell, cell: Cell, index: int) -> None:
        """
        Move cell to index under parent within transaction.

        Raises:
            TransactionNotActive: If transaction is not active
            OperationExecutionError: If the document rejects the reorder
        """
        previous_parent = self.document.get_parent(cell)
        previous_index = self.document.get_index(cell)

        def execute() -> None:
            self.document.add(parent, cell, index)

        def undo() -> None:
            if previous_parent is not None:
                self.document.add(previous_parent, cell, previous_index)

        self._apply(transaction, "move_child", cell, {"parent": parent, "index": index}, execute, undo)
        if cell not in transaction.diff.reordered:
            transaction.diff.reordered.append(cell)

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    def _apply(
        self,
        transaction: Transaction,
        operation: str,
        cell: Cell,
        params: Dict[str, Any],
        execute: Callable[[], None],
        undo: Callable[[], None],
    ) -> None:
        with self._lock:
            self._require_active(transaction)

            record = OperationRecord(
                operation=operation,
                cell=cell,
                params=params,
                timestamp=datetime.now(timezone.utc),
                undo=undo,
            )
            try:
                execute()
                record.success = True
                logger.debug(f"Transaction {transaction.id}: {operation} {cell!r} {params}")
            except Exception as e:
                record.error = str(e)
                raise OperationExecutionError(
                    f"Operation {operation} on {cell!r} failed: {e}"
                ) from e
            finally:
                transaction.operations.append(record)

    def _require_active(self, transaction: Transaction) -> None:
        if transaction.status != TransactionStatus.ACTIVE or transaction is not self._active:
            raise TransactionNotActive(
                f"Transaction {transaction.id} is not active (status: {transaction.status.value})"
            )
