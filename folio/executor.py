"""Execute model-requested actions against the tool registry."""

import json
from dataclasses import dataclass
from typing import Any

from folio.exceptions import ToolExecutionError
from folio.llm import Message, ToolCall, tool_call_id_for
from folio.logging import get_logger
from folio.tools.registry import ToolRegistry

log = get_logger(__name__)

UNKNOWN_FUNCTION = "Unknown function"


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one requested action."""

    tool_call_id: str
    name: str
    succeeded: bool
    payload: Any

    def serialized_content(self) -> str:
        if self.succeeded:
            return json.dumps(self.payload, ensure_ascii=False, default=str)
        return json.dumps({"error": str(self.payload)}, ensure_ascii=False)

    def to_message(self) -> Message:
        """Return the result as a tool turn."""
        return Message(
            role="tool",
            content=self.serialized_content(),
            tool_call_id=self.tool_call_id,
            tool_name=self.name,
        )


class ActionExecutor:
    """Run one action at a time, turning every outcome into an ActionResult.

    Nothing raised by a tool escapes `execute`: unknown names, bad arguments
    and tool failures all come back as failed results for the model to see.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def execute(self, name: str, arguments: Any, position: int = 0) -> ActionResult:
        """Execute a single action.

        Args:
            name: Capability name requested by the model
            arguments: Argument mapping (a JSON object string is decoded)
            position: Zero-based index of the action in its turn

        Returns:
            ActionResult, successful or not
        """
        call_id = tool_call_id_for(name, position)

        if not self.registry.has_tool(name):
            log.warning("Unknown function call", tool=name, call_id=call_id, args=arguments)
            return ActionResult(call_id, name, False, UNKNOWN_FUNCTION)

        try:
            args = self._decode_arguments(name, arguments)
            result = await self.registry.execute(name, args)
        except Exception as e:
            log.error(
                "Error executing tool",
                tool=name,
                call_id=call_id,
                args=arguments,
                error=str(e),
                exc_info=True,
            )
            return ActionResult(call_id, name, False, str(e))

        if not result.success:
            log.error("Tool reported failure", tool=name, call_id=call_id, args=args, error=result.error)
            return ActionResult(call_id, name, False, result.error)

        log.info("Executed tool successfully", tool=name, call_id=call_id, args=args)
        return ActionResult(call_id, name, True, result.content)

    async def execute_call(self, tool_call: ToolCall, position: int) -> ActionResult:
        return await self.execute(tool_call.name, tool_call.arguments, position)

    @staticmethod
    def _decode_arguments(name: str, arguments: Any) -> dict[str, Any]:
        if arguments is None:
            return {}
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments) if arguments.strip() else {}
            except json.JSONDecodeError as e:
                raise ToolExecutionError(name, f"Arguments are not valid JSON: {e}") from e
        if not isinstance(arguments, dict):
            raise ToolExecutionError(name, "Arguments must be an object")
        return arguments
