"""Tests for the keyed lazy cache behind the per-channel parsers."""

import threading
import time
from unittest.mock import MagicMock

import pytest

from overlay_agent.commands.parser import CommandParser
from overlay_agent.commands.policies import CHAT_POLICY, WEB_POLICY
from overlay_agent.commands.types import Channel
from overlay_agent.core.utils.lazy import LazyMap

POLICIES = {Channel.WEB: WEB_POLICY, Channel.FARCASTER: CHAT_POLICY}


def _parser_cache(factory=None) -> LazyMap:
    return LazyMap(factory or (lambda channel: CommandParser(POLICIES[channel])))


class TestLazyMapGet:
    def test_builds_on_first_request_only(self) -> None:
        factory = MagicMock(side_effect=lambda channel: CommandParser(POLICIES[channel]))
        parsers = _parser_cache(factory)

        first = parsers.get(Channel.WEB)
        second = parsers.get(Channel.WEB)

        assert first is second
        factory.assert_called_once_with(Channel.WEB)

    def test_each_channel_gets_its_own_parser(self) -> None:
        parsers = _parser_cache()

        web = parsers.get(Channel.WEB)
        chat = parsers.get(Channel.FARCASTER)

        assert web is not chat
        assert web.policy is WEB_POLICY
        assert chat.policy is CHAT_POLICY

    def test_membership_tracks_built_channels(self) -> None:
        parsers = _parser_cache()
        assert Channel.WEB not in parsers
        assert len(parsers) == 0

        parsers.get(Channel.WEB)

        assert Channel.WEB in parsers
        assert Channel.FARCASTER not in parsers
        assert len(parsers) == 1

    def test_factory_error_leaves_channel_unbuilt(self) -> None:
        parsers = _parser_cache(MagicMock(side_effect=KeyError("telegram")))
        with pytest.raises(KeyError):
            parsers.get(Channel.TELEGRAM)
        assert Channel.TELEGRAM not in parsers


class TestLazyMapReset:
    def test_reset_one_channel(self) -> None:
        parsers = _parser_cache()
        web = parsers.get(Channel.WEB)
        chat = parsers.get(Channel.FARCASTER)

        parsers.reset(Channel.WEB)

        assert parsers.get(Channel.WEB) is not web
        assert parsers.get(Channel.FARCASTER) is chat

    def test_reset_everything(self) -> None:
        parsers = _parser_cache()
        parsers.get(Channel.WEB)
        parsers.get(Channel.FARCASTER)

        parsers.reset()

        assert len(parsers) == 0

    def test_reset_unknown_key_is_noop(self) -> None:
        parsers = _parser_cache()
        parsers.reset(Channel.FRAME)
        assert len(parsers) == 0

    def test_reset_all_clears_every_cache(self) -> None:
        first = _parser_cache()
        second = _parser_cache()
        old_web = first.get(Channel.WEB)
        second.get(Channel.FARCASTER)

        LazyMap.reset_all()

        assert len(first) == 0
        assert len(second) == 0
        assert first.get(Channel.WEB) is not old_web


class TestLazyMapThreadSafety:
    def test_concurrent_first_requests_share_one_parser(self) -> None:
        results: list[CommandParser] = []
        barrier = threading.Barrier(8)
        calls: list[Channel] = []

        def slow_factory(channel: Channel) -> CommandParser:
            calls.append(channel)
            time.sleep(0.01)
            return CommandParser(POLICIES[channel])

        parsers = _parser_cache(slow_factory)

        def worker() -> None:
            barrier.wait()
            results.append(parsers.get(Channel.FARCASTER))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert calls == [Channel.FARCASTER]
