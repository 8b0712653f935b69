"""Logging for return line proration."""

from __future__ import annotations

import loguru
from loguru import logger

from erp_ledger.proration.entities import TaxStrategy


class ProrationLogger:
    """Handles all logging for proration with business logic separated."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def quantity_clamped(self, requested: float, clamped: float, limit: float) -> None:
        """Log a returned quantity pulled back into the returnable range."""
        self._logger.bind(requested=requested, clamped=clamped, limit=limit).debug(
            "Returned quantity {} clamped to {} (returnable {})",
            requested,
            clamped,
            limit,
        )

    def unknown_ordered_quantity(self, ordered_quantity: float) -> None:
        """Log a line with no usable ordered quantity."""
        self._logger.bind(ordered_quantity=ordered_quantity).debug(
            "Ordered quantity {} unusable; per-unit discount and tax set to 0",
            ordered_quantity,
        )

    def tax_resolved(self, strategy: TaxStrategy, amount: float) -> None:
        """Log which tax tier produced the line tax."""
        self._logger.bind(strategy=strategy.value, amount=amount).trace(
            "Return tax {:.4f} via {}", amount, strategy.value
        )

    def header_mismatch(self, reported: float, computed: float) -> None:
        """Log a stored return total that disagrees with the recomputation."""
        self._logger.bind(reported=reported, computed=computed).warning(
            "Stored return total {:.2f} differs from computed {:.2f}",
            reported,
            computed,
        )
