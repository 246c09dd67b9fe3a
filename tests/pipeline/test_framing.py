"""Tests for BlockFramer delimiter handling."""

import pytest

from bulkctl.pipeline.framing import BlockFramer
from tests.conftest import Recorder, commands


def feed(framer: BlockFramer, *texts: str) -> None:
    for cmd in commands(*texts):
        framer.process_command(cmd)


class TestOrdinaryCommands:
    def test_passed_through_unchanged(self, recorder: Recorder) -> None:
        framer = BlockFramer(recorder)
        sent = list(commands("a", "b"))
        for cmd in sent:
            framer.process_command(cmd)
        assert recorder.commands == sent
        assert framer.commands == 2

    def test_no_downstream_is_silent(self) -> None:
        framer = BlockFramer()
        feed(framer, "a", "{", "b", "}")
        assert framer.depth == 0

    def test_token_must_match_exactly(self, recorder: Recorder) -> None:
        framer = BlockFramer(recorder)
        feed(framer, " {", "{ ", "}}")
        assert recorder.texts == [" {", "{ ", "}}"]
        assert framer.depth == 0


class TestBlocks:
    def test_balanced_block(self, recorder: Recorder) -> None:
        framer = BlockFramer(recorder)
        feed(framer, "x", "{", "y", "}", "z")
        assert recorder.events == ["cmd:x", "start", "cmd:y", "end", "cmd:z"]

    def test_nested_only_outermost_reported(self, recorder: Recorder) -> None:
        framer = BlockFramer(recorder)
        feed(framer, "{", "a", "{", "b", "{", "}", "}", "c", "}")
        assert recorder.events == ["start", "cmd:a", "cmd:b", "cmd:c", "end"]
        assert framer.max_depth == 3
        assert framer.depth == 0

    def test_unterminated_block_keeps_depth(self, recorder: Recorder) -> None:
        framer = BlockFramer(recorder)
        feed(framer, "{", "{", "a", "}")
        assert recorder.events == ["start", "cmd:a"]
        assert framer.depth == 1

    def test_custom_tokens(self, recorder: Recorder) -> None:
        framer = BlockFramer(recorder, open_token="BEGIN", close_token="END")
        feed(framer, "BEGIN", "{", "END")
        assert recorder.events == ["start", "cmd:{", "end"]

    def test_identical_tokens_rejected(self) -> None:
        with pytest.raises(ValueError, match="must differ"):
            BlockFramer(open_token="|", close_token="|")


class TestStrayCloser:
    def test_clamped_at_zero(self, recorder: Recorder) -> None:
        framer = BlockFramer(recorder)
        feed(framer, "}", "a")
        assert framer.depth == 0
        assert framer.stray_closers == 1
        assert recorder.events == ["cmd:a"]

    def test_following_block_still_opens(self, recorder: Recorder) -> None:
        framer = BlockFramer(recorder)
        feed(framer, "}", "}", "{", "a", "}")
        assert recorder.events == ["start", "cmd:a", "end"]
        assert framer.stray_closers == 2
