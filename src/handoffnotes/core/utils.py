"""Utility functions for handoffnotes."""

import re
import unicodedata

_LINE_SPLIT = re.compile(r"\r?\n")


def split_lines(text: str | None) -> list[str]:
    """
    Split notes text into source lines on ``\\n`` or ``\\r\\n``.

    ``None`` is treated as the empty string. The empty string still yields a
    single empty line; callers that want "no blocks" for empty input must check
    for it before splitting.
    """
    return _LINE_SPLIT.split(text or "")


def slugify(text: str) -> str:
    """
    Convert heading text to an anchor slug.

    - Lowercase
    - Unicode normalize (NFKD), drop combining marks
    - Remove punctuation except spaces and hyphens
    - Convert whitespace to single `-`
    - Collapse multiple `-` to single, strip leading/trailing `-`

    Examples:
        >>> slugify("Overnight events")
        'overnight-events'
        >>> slugify("Room 4B – Mr. Núñez")
        'room-4b-mr-nunez'
    """
    text = text.lower()

    # En dash, em dash and minus sign become plain hyphens
    text = text.replace('–', '-').replace('—', '-').replace('−', '-')

    text = unicodedata.normalize('NFKD', text)
    text = ''.join(c for c in text if not unicodedata.combining(c))

    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'\s+', '-', text)
    text = re.sub(r'-+', '-', text)

    return text.strip('-')
