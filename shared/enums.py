"""
Enums and constants used across the application.
"""

from enum import Enum


class Audience(str, Enum):
    """Who the presentation is delivered to."""

    INTERNAL = "internal"
    CUSTOMER = "customer"
    MEETUP = "meetup"
    CONFERENCE = "conference"


class Tone(str, Enum):
    """Speaking register used for generated talk tracks."""

    CASUAL = "casual"
    POLITE = "polite"
    SALES = "sales"
    ACADEMIC = "academic"


class Language(str, Enum):
    """Languages supported by the phrase tables."""

    JA = "ja"
    EN = "en"


class SlideFlag(str, Enum):
    """Diagnostic tags attached to a slide."""

    TOO_LONG = "too_long"
    TOO_SHORT = "too_short"
    DENSE = "dense"
    NEEDS_CONTEXT = "needs_context"


class SourceFormat(str, Enum):
    """Hint describing where decoded deck text came from."""

    PDF = "pdf"
    PPTX = "pptx"
    GENERIC = "generic"


class ExportFormat(str, Enum):
    """Available export formats for speaking scripts."""

    MARKDOWN = "markdown"
    TEXT = "text"


# Tags that are only ever set by hand and survive flag recomputation.
MANUAL_FLAGS = frozenset({SlideFlag.NEEDS_CONTEXT})
