"""Ordered pattern tables shared by every channel policy.

Within each table the first match wins, so order is behaviour: do not sort
or regroup entries.
"""

import re

from overlay_agent.commands.types import OVERLAY_KEYWORDS

_I = re.IGNORECASE
_IS = re.IGNORECASE | re.DOTALL

KW = "|".join(OVERLAY_KEYWORDS)

# Control words must not be the tail of a flag such as --text-size.
_NB = r"(?<![\w-])"
_NUM = r"-?\d+\.?\d*"
# A colour is one lowercase word, never an article or preposition ("the color of the sea").
_COLOR_WORD = r"(?!(?:the|an?|to|of)\b)(?-i:[a-z]+)\b"

URL_PATTERN = re.compile(r"https?://[^\s]+")

LEADING_KEYWORD_PATTERN = re.compile(rf"^\s*({KW})\b", _I)
KEYWORD_WORD_PATTERN = re.compile(rf"\b({KW})\b", _I)

OVERLAY_PATTERNS = [
    re.compile(rf"{_NB}apply\s+({KW})\b", _I),
    re.compile(rf"{_NB}use\s+({KW})\b", _I),
    re.compile(rf"{_NB}with\s+({KW})\b", _I),
]

POSITION_PATTERNS = [
    re.compile(rf"{_NB}position\s+(?:at|to)?\s*({_NUM})[,\s]+({_NUM})", _I),
    re.compile(rf"{_NB}move\s+(?:to)?\s*({_NUM})[,\s]+({_NUM})", _I),
    re.compile(rf"{_NB}place\s+(?:at)?\s*({_NUM})[,\s]+({_NUM})", _I),
]

SCALE_PATTERNS = [
    re.compile(rf"{_NB}scale\s+(?:to|by)?\s*({_NUM})", _I),
    re.compile(rf"{_NB}resize\s+(?:to|by)?\s*({_NUM})", _I),
    re.compile(rf"{_NB}size\s+(?:to|of)?\s*({_NUM})", _I),
]

COLOR_PATTERNS = [
    re.compile(rf"{_NB}color\s+(?:(?:to|of)\s+)?({_COLOR_WORD})", _I),
    re.compile(rf"{_NB}set\s+color\s+(?:(?:to|of)\s+)?({_COLOR_WORD})", _I),
]

OPACITY_PATTERNS = [
    re.compile(rf"{_NB}opacity\s+(?:to|of)?\s*({_NUM})", _I),
    re.compile(rf"{_NB}alpha\s+(?:to|of)?\s*({_NUM})", _I),
    re.compile(rf"{_NB}transparent\s+(?:to|of)?\s*({_NUM})", _I),
    re.compile(rf"(?<![\w.-])({_NUM})\s*%\s*(?:opacity|alpha)\b", _I),
]

# The photograph template: "<keyword> a photograph of <desc>[. scale to N]".
PHOTOGRAPH_PATTERN = re.compile(r"^a\s+photograph\s+of\s+(.+)", _IS)
PHOTOGRAPH_ANYWHERE_PATTERN = re.compile(r"a\s+photograph\s+of\s+(.+)", _IS)
PHOTOGRAPH_SCALE_PATTERN = re.compile(
    rf"(.+?)(?:\.\s*scale\s+(?:to|by)?\s*({_NUM}))", _IS
)
INLINE_SCALE_PATTERN = re.compile(rf"{_NB}scale\s+(?:to|by)?\s*({_NUM})", _I)

GENERATE_PATTERNS = [
    re.compile(
        rf"{_NB}generate\s+(?:an?\s+(?:image|picture|photo)\s+(?:of|with)\s+)?(?:(?:a|an|the)\s+)?(.*)", _I
    ),
    re.compile(
        rf"{_NB}create\s+(?:an?\s+(?:image|picture|photo)\s+(?:of|with)\s+)?(?:(?:a|an|the)\s+)?(.*)", _I
    ),
    re.compile(
        rf"{_NB}make\s+(?:an?\s+(?:image|picture|photo)\s+(?:of|with)\s+)?(?:(?:a|an|the)\s+)?(.*)", _I
    ),
]

# Chat replies that open with a generation verb or "an image of ...".
EXPLICIT_GENERATION_PATTERNS = [
    re.compile(r"^\s*(?:generate|create|make|draw)\b", _I),
    re.compile(r"^\s*an?\s+(?:image|picture|photo)\s+of\b", _I),
]
CHAT_GENERATION_PATTERN = re.compile(
    r"^\s*(?:(?:generate|create|make|draw)\s+)?(?:an?\s+)?(?:(?:image|picture|photo)\s+)?"
    r"(?:(?:of|with)\s+)?(?:(?:a|an|the)\s+)?(.*)",
    _IS,
)
LEADING_VERB_PATTERN = re.compile(r"^\s*(?:generate|create|make|draw)\s+", _I)
LEADING_ARTICLE_PATTERN = re.compile(r"^(?:a|an|the)\s+(?:(?:image|picture|photo)\s+(?:of|with)\s+)?", _I)

PARENT_IMAGE_PATTERNS = [
    re.compile(r"overlay\s+(?:on|to|onto)\s+(?:this|parent|above|previous)\s+image", _I),
    re.compile(r"apply\s+(?:to|on|onto)\s+(?:this|parent|above|previous)\s+image", _I),
    re.compile(r"use\s+(?:this|parent|above|previous)\s+image", _I),
    re.compile(r"(?:this|parent|above|previous)\s+image", _I),
    re.compile(r"overlay\s+this", _I),
    re.compile(r"apply\s+to\s+this", _I),
    re.compile(r"this\s+photo", _I),
    re.compile(r"this\s+picture", _I),
    re.compile(r"this\s+cast", _I),
    re.compile(r"this\s+one", _I),
    re.compile(rf"^({KW})\s+this", _I),
    re.compile(rf"^({KW})\.?\s*$", _I),
    re.compile(rf"add\s+({KW})\s+to\s+this", _I),
    re.compile(rf"put\s+({KW})\s+on\s+this", _I),
    re.compile(rf"^({KW})\s+it", _I),
    re.compile(rf"^({KW})\s+the\s+image", _I),
    re.compile(rf"^({KW})", _I),
]

# Removal patterns for prompt cleaning. Multi-word forms precede the
# single-word forms they contain.
CONTROL_INSTRUCTION_PATTERNS = [
    re.compile(rf"{_NB}scale\s+(?:to|by)?\s*{_NUM}", _I),
    re.compile(rf"{_NB}resize\s+(?:to|by)?\s*{_NUM}", _I),
    re.compile(rf"{_NB}size\s+(?:to|of)?\s*{_NUM}", _I),
    re.compile(rf"{_NB}position\s+(?:at|to)?\s*{_NUM}[,\s]+{_NUM}", _I),
    re.compile(rf"{_NB}move\s+(?:to)?\s*{_NUM}[,\s]+{_NUM}", _I),
    re.compile(rf"{_NB}place\s+(?:at)?\s*{_NUM}[,\s]+{_NUM}", _I),
    re.compile(rf"{_NB}set\s+color\s+(?:(?:to|of)\s+)?{_COLOR_WORD}", _I),
    re.compile(rf"{_NB}color\s+(?:(?:to|of)\s+)?{_COLOR_WORD}", _I),
    re.compile(rf"{_NB}set\s+opacity\s+(?:to)?\s*{_NUM}", _I),
    re.compile(rf"{_NB}opacity\s+(?:to|of)?\s*{_NUM}", _I),
    re.compile(rf"{_NB}alpha\s+(?:to|of)?\s*{_NUM}", _I),
    re.compile(rf"{_NB}transparent\s+(?:to|of)?\s*{_NUM}", _I),
    re.compile(rf"(?<![\w.-])(?:at\s+)?{_NUM}\s*%\s*(?:opacity|alpha)\b", _I),
    re.compile(r"overlay\s+(?:on|to|onto)\s+(?:this|parent|above|previous)\s+image", _I),
    re.compile(r"apply\s+(?:to|on|onto)\s+(?:this|parent|above|previous)\s+image", _I),
    re.compile(r"use\s+(?:this|parent|above|previous)\s+image", _I),
    re.compile(r"(?:this|parent|above|previous)\s+image", _I),
]

# Conservative cleaning removes only these.
SCALE_POSITION_PATTERNS = CONTROL_INSTRUCTION_PATTERNS[:6]

TEXT_FLAG_PATTERNS = [
    re.compile(r"--text\s+\"[^\"]*\"", _I),
    re.compile(r"--text\s+'[^']*'", _I),
    re.compile(r"--(?:text|caption|font)-\w+\s+\S+", _I),
    re.compile(r"--caption\s+\"[^\"]*\"", _I),
    re.compile(r"--caption\s+'[^']*'", _I),
    re.compile(r"--text\s+(?:(?!\s--).)+", _I),
    re.compile(r"--caption\s+(?:(?!\s--).)+", _I),
]

OVERLAY_FILLER_PATTERN = re.compile(r"\b(?:overlay|style|effect)\b", _I)
GENERATION_FILLER_PATTERNS = [
    re.compile(r"\b(?:generate|create|make)\b", _I),
    re.compile(r"\b(?:an?|the)\s+(?:image|picture|photo)\s+(?:of|with)\b", _I),
]

# Bare text stops before the next flag or at a comma/period.
TEXT_PATTERNS = [
    re.compile(r"--text\s+\"([^\"]+)\"", _I),
    re.compile(r"--text\s+'([^']+)'", _I),
    re.compile(r"--text\s+((?:(?!\s--)[^,.])+)", _I),
    re.compile(r"--caption\s+\"([^\"]+)\"", _I),
    re.compile(r"--caption\s+'([^']+)'", _I),
    re.compile(r"--caption\s+((?:(?!\s--)[^,.])+)", _I),
]

TEXT_POSITION_PATTERNS = [
    re.compile(r"--text-position\s+([\w-]+)", _I),
    re.compile(r"--caption-position\s+([\w-]+)", _I),
]

TEXT_SIZE_PATTERNS = [
    re.compile(r"--text-size\s+(\d+)", _I),
    re.compile(r"--font-size\s+(\d+)", _I),
    re.compile(r"--caption-size\s+(\d+)", _I),
]

TEXT_COLOR_PATTERNS = [
    re.compile(r"--text-color\s+(\w+)", _I),
    re.compile(r"--font-color\s+(\w+)", _I),
    re.compile(r"--caption-color\s+(\w+)", _I),
]

TEXT_STYLE_PATTERNS = [
    re.compile(r"--text-style\s+(\w+)", _I),
    re.compile(r"--font-style\s+(\w+)", _I),
    re.compile(r"--caption-style\s+(\w+)", _I),
]

TEXT_BACKGROUND_PATTERNS = [
    re.compile(r"--text-(?:bg|background)\s+(\w+)", _I),
    re.compile(r"--caption-(?:bg|background)\s+(\w+)", _I),
]

PROMPT_SECTION_PATTERN = re.compile(r"\[PROMPT\]:\s*(.*?)(?=\[OVERLAY\]|\[TEXT\]|$)", _IS)
OVERLAY_SECTION_PATTERN = re.compile(r"\[OVERLAY\]:\s*(.*?)(?=\[PROMPT\]|\[TEXT\]|$)", _IS)
TEXT_SECTION_PATTERN = re.compile(r"\[TEXT\]:\s*(.*?)(?=\[PROMPT\]|\[OVERLAY\]|$)", _IS)

PROMPT_ALT_PATTERN = re.compile(r"\bPROMPT:\s*(.*?)(?=\bOVERLAY:|\bTEXT:|$)", _IS)
OVERLAY_ALT_PATTERN = re.compile(r"\bOVERLAY:\s*(.*?)(?=\bPROMPT:|\bTEXT:|$)", _IS)
TEXT_ALT_PATTERN = re.compile(r"\bTEXT:\s*(.*?)(?=\bPROMPT:|\bOVERLAY:|$)", _IS)

CAPTION_PATTERN = re.compile(r"\bCAPTION:\s*(.*?)(?=\bPROMPT:|\bOVERLAY:|\bWOWOW:|$)", _IS)
WOWOW_PATTERN = re.compile(r"\bWOWOW:\s*(.*?)(?=\bPROMPT:|\bCAPTION:|\bTEXT:|$)", _IS)

STRUCTURED_PATTERNS = [
    PROMPT_SECTION_PATTERN,
    OVERLAY_SECTION_PATTERN,
    TEXT_SECTION_PATTERN,
    PROMPT_ALT_PATTERN,
    OVERLAY_ALT_PATTERN,
    TEXT_ALT_PATTERN,
    CAPTION_PATTERN,
    WOWOW_PATTERN,
]

# [TEXT] section vocabulary
TEXT_POSITIONS = frozenset({
    "top", "bottom", "left", "right", "center",
    "top-left", "top-right", "bottom-left", "bottom-right",
})
SECTION_SIZE_PATTERN = re.compile(r"size\s+(\d+)", _I)
SECTION_COLOR_PATTERN = re.compile(r"color\s+(\w+)", _I)
SECTION_STYLE_PATTERN = re.compile(r"style\s+(\w+)", _I)
SECTION_BARE_STYLE_PATTERN = re.compile(r"^(serif|monospace|handwriting|thin|bold)$", _I)

# Words that carry no meaning once control phrases are gone ("move to 1, 2 and set color red").
FILLER_WORDS = frozenset({
    "a", "an", "the", "and", "then", "also", "set", "to", "it", "its",
    "please", "pls", "with", "at", "by", "of", "on", "in", "make",
    "apply", "use",
})
