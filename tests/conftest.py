"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
import os
import sys

from loguru import logger
import pytest


@pytest.fixture(autouse=True)
def _clean_ledger_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop ERP_LEDGER_* variables so config defaults are predictable."""
    for name in list(os.environ):
        if name.startswith("ERP_LEDGER_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_loguru() -> Iterator[None]:
    """Reset loguru sinks after each test.

    The CLI swaps the sink for one bound to the runner's stderr, which is
    closed once the invocation finishes.
    """
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
