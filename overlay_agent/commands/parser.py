"""Shared parsing pipeline.

One pipeline serves every channel; channel differences live in the
ChannelPolicy passed to the constructor. A parser keeps no per-call state,
so a single instance can be shared across threads.
"""

from overlay_agent.commands import patterns as P
from overlay_agent.commands.cleaning import is_directive_only
from overlay_agent.commands.extract import (
    ParseDraft,
    extract_controls,
    extract_text,
    extract_url,
    find_overlay_mode,
    find_sections,
    has_parent_reference,
    leading_keyword,
    split_photograph,
    standalone_keyword,
)
from overlay_agent.commands.policies import BASE_POLICY, ChannelPolicy
from overlay_agent.commands.types import Action, ParsedCommand
from overlay_agent.config import MAX_COMMAND_CHARS
from overlay_agent.core.logging import get_logger

_log = get_logger("commands.parser")

MIN_FALLBACK_PROMPT_CHARS = 5


class CommandParser:
    """Turns a free-text instruction into a ParsedCommand."""

    def __init__(self, policy: ChannelPolicy = BASE_POLICY):
        self.policy = policy
        self._log = _log.bind(parser=policy.name)

    def __repr__(self) -> str:
        return f"CommandParser(policy={self.policy.name!r})"

    def parse(self, instruction: str | None) -> ParsedCommand:
        """Parse one instruction. Never raises on malformed input.

        Args:
            instruction: Raw user text; None is treated as empty

        Returns:
            Immutable ParsedCommand
        """
        raw = (instruction or "")[:MAX_COMMAND_CHARS]
        draft = ParseDraft()
        text = extract_url(raw, draft)

        handled = False
        if self.policy.before is not None:
            handled = self.policy.before(self.policy, text, draft)

        if not handled:
            self._parse_keywords(text, draft)
            extract_controls(text, draft)
            extract_text(text, draft)
            if draft.prompt is None and not draft.explicit_generation:
                self._parse_prompt(text, draft)

        if self.policy.after is not None:
            self.policy.after(self.policy, text, draft)

        self._finalize(draft)
        result = draft.build()

        self._log.info(
            "CMD parsed",
            action=result.action,
            overlay_mode=result.overlay_mode,
            use_parent_image=result.use_parent_image,
            has_text=result.text is not None,
        )
        return result

    def _parse_keywords(self, text: str, draft: ParseDraft) -> None:
        if draft.explicit_generation:
            # Explicit generation only takes a mode from "with <keyword>" style phrases.
            mode = find_overlay_mode(text)
            if mode is not None:
                draft.overlay_mode = mode
            return

        mode = leading_keyword(text)
        if mode is None:
            mode = find_overlay_mode(text)
            if mode is not None:
                draft.overlay_mode = mode
                self._log.debug("Overlay phrase", overlay_mode=mode)
                return

            mode = standalone_keyword(text)
            if mode is not None:
                draft.overlay_mode = mode
                # "add <keyword> to this" targets the replied-to image.
                if has_parent_reference(text):
                    draft.use_parent_image = True
                self._log.debug("Standalone keyword", overlay_mode=mode, use_parent_image=draft.use_parent_image)
            return

        draft.action = Action.OVERLAY
        draft.use_parent_image = True
        draft.overlay_mode = mode
        self._log.debug("Leading overlay keyword", overlay_mode=mode)

        remainder = P.LEADING_KEYWORD_PATTERN.sub("", text, count=1).strip()
        if not remainder:
            return

        photo = P.PHOTOGRAPH_PATTERN.match(remainder)
        if photo:
            split_photograph(photo.group(1), draft)
            return

        draft.set_prompt(self.policy.clean(remainder))
        scale = P.INLINE_SCALE_PATTERN.search(remainder)
        if scale:
            draft.controls["scale"] = float(scale.group(1))

    def _parse_prompt(self, text: str, draft: ParseDraft) -> None:
        sections = find_sections(text)
        if sections.prompt:
            self._parse_prompt_section(sections.prompt, draft)
            return

        for pattern in P.GENERATE_PATTERNS:
            match = pattern.search(text)
            if match and match.group(1).strip():
                draft.action = Action.GENERATE
                draft.action_decided = True
                draft.set_prompt(self.policy.clean(match.group(1)))
                self._log.debug("Generation phrase", prompt=draft.prompt)
                return

        # The URL is already out of the working text, so what is left is a description.
        if draft.use_parent_image:
            return
        cleaned = self.policy.clean(text)
        if len(cleaned) > MIN_FALLBACK_PROMPT_CHARS and not is_directive_only(text):
            draft.set_prompt(cleaned)

    def _parse_prompt_section(self, section: str, draft: ParseDraft) -> None:
        section = extract_url(section, draft)

        for pattern in P.PARENT_IMAGE_PATTERNS:
            if pattern.search(section):
                draft.use_parent_image = True
                draft.action = Action.OVERLAY
                section = pattern.sub("", section, count=1).strip()
                break

        for pattern in P.GENERATE_PATTERNS:
            match = pattern.search(section)
            if match and match.group(1).strip():
                draft.set_prompt(self.policy.clean(match.group(1)))
                if draft.prompt:
                    return

        draft.set_prompt(self.policy.clean(section))

    def _finalize(self, draft: ParseDraft) -> None:
        if not draft.action_decided:
            if draft.overlay_mode is not None:
                draft.action = Action.OVERLAY
            elif draft.action == Action.GENERATE and draft.use_parent_image:
                draft.action = Action.OVERLAY
            elif (
                (draft.controls or draft.text)
                and not draft.prompt
                and not draft.use_parent_image
                and not draft.base_image_url
            ):
                draft.action = Action.ADJUST

        if (draft.action == Action.OVERLAY or draft.use_parent_image) and draft.overlay_mode is None:
            draft.overlay_mode = self.policy.default_overlay
