"""Runtime configuration, clocks, coercion and errors shared by the engine."""

from erp_ledger.core.clock import Clock, FixedClock, SystemClock
from erp_ledger.core.config import LedgerConfig, load_ledger_config_from_env
from erp_ledger.core.errors import (
    LedgerEngineError,
    ProrationInputError,
    SnapshotLoadError,
    UpstreamRecordError,
)
from erp_ledger.core.numbers import to_number

__all__ = [
    "Clock",
    "FixedClock",
    "LedgerConfig",
    "LedgerEngineError",
    "ProrationInputError",
    "SnapshotLoadError",
    "SystemClock",
    "UpstreamRecordError",
    "load_ledger_config_from_env",
    "to_number",
]
