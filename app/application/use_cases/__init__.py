"""Aggregate application use cases."""

from .timeline import AppendResult, append_event

__all__ = [
    "AppendResult",
    "append_event",
]
