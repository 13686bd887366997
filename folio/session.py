"""Conversation session: owns the transcript and answers user messages."""

from folio.config import get_config
from folio.exceptions import SessionBusyError
from folio.executor import ActionExecutor
from folio.instructions import InstructionLoader
from folio.llm import LLMProvider, get_provider
from folio.logging import get_logger
from folio.orchestrator import CycleOutcome, OutcomeKind, TurnOrchestrator
from folio.tools import ToolRegistry, create_default_registry
from folio.transcript import Transcript

log = get_logger(__name__)

EXHAUSTED_MESSAGE = (
    "I had to stop processing because the request required too many steps. "
    "Could you try a simpler request?"
)
EMPTY_MESSAGE = "Failed to generate a response."
ERROR_MESSAGE = "Sorry, I encountered an error: {error}"


class Session:
    """A single conversation.

    The transcript is created on first use and lives until `reset`. `submit`
    must not be called again while a previous call is still running.
    """

    def __init__(
        self,
        provider: LLMProvider | None = None,
        registry: ToolRegistry | None = None,
        system_prompt: str | None = None,
        max_iterations: int | None = None,
    ):
        """Initialize the session.

        Args:
            provider: Optional LLM provider override (defaults to the global one)
            registry: Optional tool registry (defaults to the file tools rooted at the workspace)
            system_prompt: Optional system prompt (defaults to the configured prompt file)
            max_iterations: Optional iteration cap override
        """
        cfg = get_config()
        self.provider = provider or get_provider()
        self.registry = registry or create_default_registry(cfg.resolved_workspace_path())
        if system_prompt is None:
            system_prompt = InstructionLoader().load(cfg.agent.system_prompt_file)
        self.system_prompt = system_prompt
        self.orchestrator = TurnOrchestrator(
            provider=self.provider,
            executor=ActionExecutor(self.registry),
            max_iterations=max_iterations or cfg.agent.max_iterations,
        )
        self._transcript: Transcript | None = None
        self._busy = False

    @property
    def transcript(self) -> Transcript:
        if self._transcript is None:
            self._transcript = Transcript(self.system_prompt)
        return self._transcript

    @property
    def busy(self) -> bool:
        return self._busy

    async def submit(self, text: str) -> str:
        """Process a user message and return the reply text.

        Never raises: failures are reported as a fixed error reply.
        """
        try:
            if self._busy:
                raise SessionBusyError()
            self._busy = True
            try:
                log.info("Processing user message", message=text)
                transcript = self.transcript
                transcript.add_user(text)
                outcome = await self.orchestrator.run(transcript)
            finally:
                self._busy = False
        except Exception as e:
            log.error("Error in chat interaction", error=str(e), exc_info=True)
            return ERROR_MESSAGE.format(error=e)

        return self._render(outcome)

    @staticmethod
    def _render(outcome: CycleOutcome) -> str:
        if outcome.kind is OutcomeKind.COMPLETED and outcome.text is not None:
            return outcome.text
        if outcome.kind is OutcomeKind.EXHAUSTED:
            return EXHAUSTED_MESSAGE
        return EMPTY_MESSAGE

    def reset(self) -> None:
        """Discard the conversation and start over from the system prompt."""
        self._transcript = Transcript(self.system_prompt)
        log.info("Conversation history has been reset")

    async def close(self) -> None:
        await self.provider.close()
