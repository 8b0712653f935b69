from __future__ import annotations

from dataclasses import dataclass
import os

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_PURCHASE_FULFILLED_STATUSES = ("received", "partially received")
DEFAULT_SALES_FULFILLED_STATUSES = ("invoiced",)


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Engine configuration loaded at process startup."""

    purchase_fulfilled_statuses: frozenset[str] = frozenset(
        DEFAULT_PURCHASE_FULFILLED_STATUSES
    )
    sales_fulfilled_statuses: frozenset[str] = frozenset(
        DEFAULT_SALES_FULFILLED_STATUSES
    )
    draft_status: str = "draft"
    mismatch_tolerance: float = 0.01
    log_level: str = "WARNING"

    def fulfilled_statuses_for(self, party: str) -> frozenset[str]:
        """Fulfilled order statuses for a ``supplier`` or ``client`` ledger."""
        if party == "supplier":
            return self.purchase_fulfilled_statuses
        if party == "client":
            return self.sales_fulfilled_statuses
        raise ValueError("party must be one of: supplier, client")


def _status_set(name: str, default: tuple[str, ...]) -> frozenset[str]:
    raw = os.environ.get(name)
    if raw is None:
        return frozenset(default)
    statuses = frozenset(
        part.strip().lower() for part in raw.split(",") if part.strip()
    )
    if not statuses:
        raise ValueError(f"{name} must list at least one status")
    return statuses


def load_ledger_config_from_env() -> LedgerConfig:
    """Load engine config from env and validate it."""
    purchase_statuses = _status_set(
        "ERP_LEDGER_PURCHASE_FULFILLED_STATUSES",
        DEFAULT_PURCHASE_FULFILLED_STATUSES,
    )
    sales_statuses = _status_set(
        "ERP_LEDGER_SALES_FULFILLED_STATUSES",
        DEFAULT_SALES_FULFILLED_STATUSES,
    )

    draft_status = os.environ.get("ERP_LEDGER_DRAFT_STATUS", "draft").strip().lower()
    if not draft_status:
        raise ValueError("ERP_LEDGER_DRAFT_STATUS must not be empty")

    tolerance_value = os.environ.get("ERP_LEDGER_MISMATCH_TOLERANCE", "0.01").strip()
    try:
        tolerance = float(tolerance_value)
    except ValueError:
        raise ValueError(
            "ERP_LEDGER_MISMATCH_TOLERANCE must be a number"
        ) from None
    if tolerance < 0:
        raise ValueError("ERP_LEDGER_MISMATCH_TOLERANCE must be >= 0")

    log_level = os.environ.get("ERP_LEDGER_LOG_LEVEL", "WARNING").strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(
            "ERP_LEDGER_LOG_LEVEL must be one of: "
            + ", ".join(sorted(_LOG_LEVELS))
        )

    return LedgerConfig(
        purchase_fulfilled_statuses=purchase_statuses,
        sales_fulfilled_statuses=sales_statuses,
        draft_status=draft_status,
        mismatch_tolerance=tolerance,
        log_level=log_level,
    )
