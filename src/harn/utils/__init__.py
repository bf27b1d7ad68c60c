"""Utility helpers."""
from .durations import DURATION, DurationType, coerce_duration, format_duration, parse_duration

__all__ = [
    "DURATION",
    "DurationType",
    "coerce_duration",
    "format_duration",
    "parse_duration",
]
