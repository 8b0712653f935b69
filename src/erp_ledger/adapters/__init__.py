"""Adapters between the ERP backend and the engine."""
