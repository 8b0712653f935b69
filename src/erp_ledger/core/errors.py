"""Exception hierarchy for the ledger engine.

Dirty business data is never raised; it is coerced and logged. Only caller
contract violations surface as exceptions.
"""

from __future__ import annotations


class LedgerEngineError(Exception):
    """Base error for ledger engine failures."""


class ProrationInputError(LedgerEngineError, TypeError):
    """Proration was called without an order line."""


class UpstreamRecordError(LedgerEngineError):
    """An upstream payload could not be read as a record mapping."""


class SnapshotLoadError(LedgerEngineError):
    """A statement or return snapshot file could not be loaded."""
