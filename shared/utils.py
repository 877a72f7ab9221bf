"""Helpers shared by the script planner components."""

import math
import uuid

from .config import config
from .logging_utils import setup_logging

__all__ = [
    "config",
    "setup_logging",
    "generate_id",
    "round_half_up",
    "clamp",
    "truncate",
    "format_minutes_seconds",
]


def generate_id() -> str:
    """Generate an opaque unique identifier."""
    return str(uuid.uuid4())


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending .5 upwards (72.5 -> 73)."""
    return int(math.floor(value + 0.5))


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp value into the inclusive range [lower, upper]."""
    return max(lower, min(upper, value))


def truncate(text: str, max_length: int) -> str:
    """Cut text to at most max_length characters."""
    if len(text) > max_length:
        return text[:max_length]
    return text


def format_minutes_seconds(seconds: int) -> tuple[int, int]:
    """Split a duration in seconds into (minutes, seconds)."""
    return seconds // 60, seconds % 60
