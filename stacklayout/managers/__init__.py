"""
Manager components for the stack layout engine.

LayoutManager lives in stacklayout.managers.layout_manager; it depends on the
layout engines, which in turn depend on the transaction manager exported here.
"""

from .transaction_manager import (
    TransactionManager,
    Transaction,
    TransactionStatus,
    OperationRecord,
    StructuralDiff,
    CommitResult,
    # Exceptions
    TransactionError,
    TransactionAlreadyActive,
    TransactionNotActive,
    OperationExecutionError,
)

__all__ = [
    'TransactionManager',
    'Transaction',
    'TransactionStatus',
    'OperationRecord',
    'StructuralDiff',
    'CommitResult',
    # Exceptions
    'TransactionError',
    'TransactionAlreadyActive',
    'TransactionNotActive',
    'OperationExecutionError',
]
