"""Utility helpers."""

from landtemp.util.retry import retry_call

__all__ = ["retry_call"]
