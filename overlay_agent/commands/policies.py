"""Per-channel parsing policies.

A channel is described by a ChannelPolicy record rather than a parser
subclass. The shared pipeline in ``parser.py`` calls the policy's
``before`` hook ahead of generic extraction and its ``after`` hook once
generic extraction is done.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from overlay_agent.commands import patterns as P
from overlay_agent.commands.cleaning import clean_prompt
from overlay_agent.commands.extract import (
    ParseDraft,
    extract_controls,
    extract_text_section,
    extract_url,
    find_overlay_mode,
    find_sections,
    has_parent_reference,
    has_structured_format,
    is_explicit_generation,
    split_photograph,
)
from overlay_agent.commands.types import Action, OverlayMode
from overlay_agent.core.logging import get_logger

_log = get_logger("commands.policies")

# Chat replies whose prompt is longer than this describe a new image.
CHAT_DESCRIPTIVE_PROMPT_CHARS = 10


@dataclass(frozen=True)
class ChannelPolicy:
    """Strategy record for one channel family.

    Attributes:
        name: Label used in logs
        default_overlay: Mode substituted when an overlay has none
        clean_fallback_threshold: Source length above which an over-cleaned
            prompt is retried conservatively
        strip_generation_filler: Drop generate/create/make filler when cleaning
        before: Runs after URL extraction; returns True when it fully parsed
            the instruction and generic extraction must be skipped
        after: Runs once generic extraction is done
    """

    name: str
    default_overlay: OverlayMode
    clean_fallback_threshold: int = 10
    strip_generation_filler: bool = False
    before: Optional[Callable[["ChannelPolicy", str, ParseDraft], bool]] = None
    after: Optional[Callable[["ChannelPolicy", str, ParseDraft], None]] = None

    def clean(self, text: str) -> str:
        return clean_prompt(
            text,
            fallback_source_length=self.clean_fallback_threshold,
            strip_generation_filler=self.strip_generation_filler,
        )


# =============================================================================
# Web form
# =============================================================================

def _web_before(policy: ChannelPolicy, text: str, draft: ParseDraft) -> bool:
    if not has_structured_format(text):
        return False

    sections = find_sections(text)
    _log.debug(
        "Structured input",
        prompt=bool(sections.prompt),
        overlay=bool(sections.overlay),
        text=bool(sections.text),
    )

    if sections.prompt:
        prompt = extract_url(sections.prompt, draft)
        draft.set_prompt(policy.clean(prompt))

    if sections.overlay:
        mode = find_overlay_mode(sections.overlay, substring=True)
        if mode is not None:
            draft.overlay_mode = mode
            draft.action = Action.OVERLAY
        extract_controls(sections.overlay, draft, overwrite_scale=True)

    if sections.text:
        extract_text_section(sections.text, draft)

    return True


def _web_after(policy: ChannelPolicy, text: str, draft: ParseDraft) -> None:
    # A prompt that still carries the template is narrowed to its description.
    source = draft.prompt or text
    match = P.PHOTOGRAPH_ANYWHERE_PATTERN.search(source)
    if match:
        split_photograph(match.group(1), draft)
        _log.debug("Photo description", prompt=draft.prompt)


# =============================================================================
# Chat replies
# =============================================================================

def _chat_generation_prompt(policy: ChannelPolicy, text: str) -> str | None:
    for pattern in P.GENERATE_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1).strip():
            cleaned = policy.clean(match.group(1))
            if cleaned:
                return cleaned

    match = P.CHAT_GENERATION_PATTERN.match(text)
    if match and match.group(1).strip():
        cleaned = policy.clean(match.group(1))
        if cleaned:
            return cleaned

    # Last resort keeps everything but the verb and article.
    stripped = P.LEADING_VERB_PATTERN.sub("", text, count=1)
    stripped = P.LEADING_ARTICLE_PATTERN.sub("", stripped.strip(), count=1)
    return stripped.strip() or None


def _chat_before(policy: ChannelPolicy, text: str, draft: ParseDraft) -> bool:
    if is_explicit_generation(text):
        draft.action = Action.GENERATE
        draft.action_decided = True
        draft.explicit_generation = True
        draft.set_prompt(_chat_generation_prompt(policy, text))
        _log.debug("Explicit generation", prompt=draft.prompt)
    elif has_parent_reference(text):
        draft.use_parent_image = True
        draft.parent_reference = True
        draft.action = Action.OVERLAY
        # "put baseify on this" names the mode mid-sentence.
        keyword = P.KEYWORD_WORD_PATTERN.search(text)
        if keyword:
            draft.overlay_mode = OverlayMode(keyword.group(1).lower())
        _log.debug("Parent image reference", overlay_mode=draft.overlay_mode)
    return False


def _chat_after(policy: ChannelPolicy, text: str, draft: ParseDraft) -> None:
    if draft.use_parent_image and draft.overlay_mode is None:
        draft.overlay_mode = policy.default_overlay
        _log.debug("Parent image without mode", overlay_mode=draft.overlay_mode)

    if draft.overlay_mode is None or draft.parent_reference or draft.explicit_generation:
        return

    # A keyword inside a longer description is colour, not a command.
    if draft.prompt and len(draft.prompt) > CHAT_DESCRIPTIVE_PROMPT_CHARS:
        draft.action = Action.GENERATE
    else:
        draft.use_parent_image = True
        draft.action = Action.OVERLAY
    draft.action_decided = True


BASE_POLICY = ChannelPolicy(
    name="base",
    default_overlay=OverlayMode.HIGHERIFY,
)

WEB_POLICY = ChannelPolicy(
    name="web",
    default_overlay=OverlayMode.HIGHERIFY,
    clean_fallback_threshold=10,
    strip_generation_filler=True,
    before=_web_before,
    after=_web_after,
)

CHAT_POLICY = ChannelPolicy(
    name="chat",
    default_overlay=OverlayMode.DEGENIFY,
    clean_fallback_threshold=5,
    before=_chat_before,
    after=_chat_after,
)
