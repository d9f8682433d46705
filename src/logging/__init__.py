"""Logging setup and per-thread log context."""
