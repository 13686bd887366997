"""Multi-turn tool orchestration loop."""

from dataclasses import dataclass
from enum import Enum

from folio.executor import ActionExecutor
from folio.llm import LLMProvider, Message
from folio.logging import get_logger
from folio.transcript import Transcript

log = get_logger(__name__)

MAX_ITERATIONS = 5


class OutcomeKind(str, Enum):
    COMPLETED = "completed"
    EXHAUSTED = "exhausted"
    EMPTY = "empty"


@dataclass(frozen=True)
class CycleOutcome:
    """How one orchestration cycle ended."""

    kind: OutcomeKind
    text: str | None = None
    iterations: int = 0
    queries: int = 0

class TurnOrchestrator:
    """Alternate model queries and action execution until the model answers.

    Each iteration consumes one reply. A reply without actions ends the cycle.
    A reply with actions has them executed in order, then the model is queried
    once more; that follow-up either ends the cycle or, if it requests more
    actions, becomes the next iteration's reply without another query. At most
    ``2 * max_iterations`` queries are made per cycle.

    Provider errors propagate to the caller. Tool failures do not: they are
    recorded in the transcript as error payloads.
    """

    def __init__(
        self,
        provider: LLMProvider,
        executor: ActionExecutor,
        max_iterations: int = MAX_ITERATIONS,
    ):
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.provider = provider
        self.executor = executor
        self.max_iterations = max_iterations

    async def query(self, transcript: Transcript) -> Message:
        """Send the transcript and tool catalog, append and return the reply turn."""
        response = await self.provider.complete(
            transcript.as_messages(),
            tools=self.executor.registry.get_definitions(),
        )
        return transcript.add_assistant(response)

    async def execute_actions(self, transcript: Transcript, reply: Message) -> None:
        """Execute the reply's actions one by one, appending each result turn."""
        for position, tool_call in enumerate(reply.tool_calls):
            result = await self.executor.execute_call(tool_call, position)
            transcript.append(result.to_message())

    async def run(self, transcript: Transcript) -> CycleOutcome:
        """Run one cycle against the transcript."""
        iteration_count = 0
        queries = 0
        continue_flag = True
        last_reply: Message | None = None
        pending: Message | None = None

        while continue_flag and iteration_count < self.max_iterations:
            iteration_count += 1
            log.info("Starting iteration", iteration=iteration_count, max_iterations=self.max_iterations)

            if pending is None:
                reply = await self.query(transcript)
                queries += 1
            else:
                reply, pending = pending, None

            if not reply.has_tool_calls:
                last_reply = reply
                continue_flag = False
                continue

            await self.execute_actions(transcript, reply)

            follow_up = await self.query(transcript)
            queries += 1
            if follow_up.has_tool_calls:
                pending = follow_up
            else:
                last_reply = follow_up
                continue_flag = False

        if last_reply is not None and last_reply.content.strip():
            return CycleOutcome(OutcomeKind.COMPLETED, last_reply.content, iteration_count, queries)
        if iteration_count >= self.max_iterations:
            log.warning("Reached maximum iterations, stopping", max_iterations=self.max_iterations)
            return CycleOutcome(OutcomeKind.EXHAUSTED, None, iteration_count, queries)
        log.warning("Cycle ended without a text reply", iterations=iteration_count)
        return CycleOutcome(OutcomeKind.EMPTY, None, iteration_count, queries)
