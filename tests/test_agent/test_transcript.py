import pytest

from folio.exceptions import TranscriptError
from folio.llm import LLMResponse, Message, ToolCall
from folio.transcript import Transcript


def _requesting_turn(transcript: Transcript, *names: str) -> Message:
    return transcript.add_assistant(
        LLMResponse(
            content="",
            tool_calls=[ToolCall(id="model-id", name=name, arguments={}) for name in names],
        )
    )


def _tool(call_id: str, name: str) -> Message:
    return Message(role="tool", content="{}", tool_call_id=call_id, tool_name=name)


def test_new_transcript_holds_only_system_turn():
    transcript = Transcript("be helpful")

    assert len(transcript) == 1
    assert transcript[0] == Message(role="system", content="be helpful")


def test_assistant_turn_gets_positional_tool_call_ids():
    transcript = Transcript("sys")
    turn = _requesting_turn(transcript, "readFile", "listFiles", "readFile")

    assert [tc.id for tc in turn.tool_calls] == ["readFile_0", "listFiles_1", "readFile_2"]


def test_tool_turns_accepted_in_request_order():
    transcript = Transcript("sys")
    _requesting_turn(transcript, "readFile", "listFiles")

    transcript.append(_tool("readFile_0", "readFile"))
    transcript.append(_tool("listFiles_1", "listFiles"))

    assert [m.role for m in transcript] == ["system", "assistant", "tool", "tool"]


def test_tool_turn_out_of_order_rejected():
    transcript = Transcript("sys")
    _requesting_turn(transcript, "readFile", "listFiles")

    with pytest.raises(TranscriptError):
        transcript.append(_tool("listFiles_1", "listFiles"))


def test_tool_turn_without_request_rejected():
    transcript = Transcript("sys")
    transcript.add_user("hello")

    with pytest.raises(TranscriptError):
        transcript.append(_tool("readFile_0", "readFile"))


def test_extra_tool_turn_rejected():
    transcript = Transcript("sys")
    _requesting_turn(transcript, "readFile")
    transcript.append(_tool("readFile_0", "readFile"))

    with pytest.raises(TranscriptError):
        transcript.append(_tool("readFile_1", "readFile"))


def test_unknown_role_rejected():
    with pytest.raises(TranscriptError):
        Transcript("sys").append(Message(role="narrator", content="once upon a time"))


def test_turns_snapshot_is_read_only():
    transcript = Transcript("sys")
    snapshot = transcript.turns
    transcript.add_user("later")

    assert len(snapshot) == 1
    assert len(transcript.turns) == 2
