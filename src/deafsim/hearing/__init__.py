"""Hearing loss simulation - degrades text as a hard-of-hearing listener hears it."""

from deafsim.hearing.confusion import confusion_table_for
from deafsim.hearing.engine import (
    DegradationResult,
    HearingLossSimulator,
    thresholds_for,
)
from deafsim.language import InvalidConfiguration, resolve_language

__all__ = [
    "DegradationResult",
    "HearingLossSimulator",
    "InvalidConfiguration",
    "confusion_table_for",
    "resolve_language",
    "thresholds_for",
]
