"""Append-only conversation transcript."""

from collections.abc import Iterator

from folio.exceptions import TranscriptError
from folio.llm import LLMResponse, Message


class Transcript:
    """Ordered log of conversation turns.

    Turns are appended once and never changed. Tool turns must directly follow
    the assistant turn that requested them, answering its requests in order.
    """

    def __init__(self, system_prompt: str | None = None):
        self._turns: list[Message] = []
        if system_prompt is not None:
            self.add_system(system_prompt)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._turns)

    def __getitem__(self, index: int) -> Message:
        return self._turns[index]

    @property
    def turns(self) -> tuple[Message, ...]:
        return tuple(self._turns)

    def as_messages(self) -> list[Message]:
        """Snapshot of the turns, safe to hand to a provider."""
        return list(self._turns)

    def add_system(self, content: str) -> Message:
        return self.append(Message(role="system", content=content))

    def add_user(self, content: str) -> Message:
        return self.append(Message(role="user", content=content))

    def add_assistant(self, reply: LLMResponse | Message) -> Message:
        message = reply.to_message() if isinstance(reply, LLMResponse) else reply
        return self.append(message)

    def append(self, message: Message) -> Message:
        """Append a turn, enforcing the tool-turn ordering rules."""
        if message.role not in ("system", "user", "assistant", "tool"):
            raise TranscriptError(f"Unknown role: {message.role!r}")
        if message.role == "tool":
            self._check_tool_turn(message)
        elif message.role == "assistant":
            ids = [tc.id for tc in message.tool_calls]
            if len(ids) != len(set(ids)):
                raise TranscriptError("Duplicate tool call ids in one assistant turn")
        self._turns.append(message)
        return message

    def _check_tool_turn(self, message: Message) -> None:
        answered = 0
        requester: Message | None = None
        for turn in reversed(self._turns):
            if turn.role == "tool":
                answered += 1
                continue
            if turn.role == "assistant":
                requester = turn
            break

        if requester is None or not requester.tool_calls:
            raise TranscriptError(
                f"Tool result {message.tool_call_id!r} does not follow an assistant turn with tool calls"
            )
        if answered >= len(requester.tool_calls):
            raise TranscriptError(
                f"Tool result {message.tool_call_id!r} exceeds the {len(requester.tool_calls)} requested actions"
            )
        expected = requester.tool_calls[answered]
        if message.tool_call_id != expected.id or message.tool_name != expected.name:
            raise TranscriptError(
                f"Tool result {message.tool_call_id!r} out of order; expected {expected.id!r}"
            )
