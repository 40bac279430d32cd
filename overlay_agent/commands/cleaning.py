"""Prompt cleaning: strip overlay keywords and directives from free text."""

import re

from overlay_agent.commands.patterns import (
    CONTROL_INSTRUCTION_PATTERNS,
    FILLER_WORDS,
    GENERATION_FILLER_PATTERNS,
    KEYWORD_WORD_PATTERN,
    OVERLAY_FILLER_PATTERN,
    SCALE_POSITION_PATTERNS,
    TEXT_FLAG_PATTERNS,
)

_MULTI_SPACE = re.compile(r"\s{2,}")
_TRAILING_PUNCT = re.compile(r"[.,\s]+$")
_WORD = re.compile(r"[^\W_]+")

MIN_CLEAN_LENGTH = 5


def _tidy(text: str) -> str:
    text = _MULTI_SPACE.sub(" ", text)
    text = _TRAILING_PUNCT.sub("", text)
    return text.strip()


def strip_directives(text: str) -> str:
    """Remove keywords, control phrases and text flags, with no length guard."""
    cleaned = text
    for pattern in TEXT_FLAG_PATTERNS:
        cleaned = pattern.sub("", cleaned)

    cleaned = KEYWORD_WORD_PATTERN.sub("", cleaned)
    cleaned = OVERLAY_FILLER_PATTERN.sub("", cleaned)

    for pattern in CONTROL_INSTRUCTION_PATTERNS:
        cleaned = pattern.sub("", cleaned)

    return _tidy(cleaned)


def clean_prompt(
    text: str,
    *,
    fallback_source_length: int = 10,
    strip_generation_filler: bool = False,
) -> str:
    """Clean a prompt candidate.

    Cleaning is idempotent: a cleaned prompt passed back in comes out
    unchanged. The conservative result is only kept when it is itself longer
    than ``fallback_source_length``, so a second pass takes the same branch.

    Args:
        text: Raw prompt candidate
        fallback_source_length: When the aggressive result is shorter than
            MIN_CLEAN_LENGTH and the source is longer than this, only scale
            and position phrases are removed instead
        strip_generation_filler: Also drop generate/create/make and
            "an image of" style filler

    Returns:
        Cleaned prompt, possibly empty
    """
    if strip_generation_filler:
        for pattern in GENERATION_FILLER_PATTERNS:
            text = pattern.sub("", text)
        text = _tidy(text)

    cleaned = strip_directives(text)

    if len(cleaned) < MIN_CLEAN_LENGTH and len(text) > fallback_source_length:
        conservative = text
        for pattern in SCALE_POSITION_PATTERNS:
            conservative = pattern.sub("", conservative)
        conservative = _tidy(conservative)
        if len(conservative) > fallback_source_length:
            cleaned = conservative

    return cleaned


def is_directive_only(text: str) -> bool:
    """True when nothing but directives and filler words remain."""
    residue = strip_directives(text)
    words = [w for w in _WORD.findall(residue) if w.lower() not in FILLER_WORDS]
    return not words
