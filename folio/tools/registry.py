"""Tool registry and base tool class."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator

from folio.exceptions import ToolExecutionError, ToolNotFoundError
from folio.logging import get_logger

log = get_logger(__name__)

_TRUE_STRINGS = {"true", "yes", "1"}
_FALSE_STRINGS = {"false", "no", "0"}


class ToolResult(BaseModel):
    """Result from tool execution."""

    success: bool = True
    content: Any = ""
    error: str | None = None

    @model_validator(mode="after")
    def _normalize_failure_error(self) -> "ToolResult":
        """Ensure failed results always provide an error message."""
        if not self.success and not (self.error or "").strip():
            fallback = str(self.content or "").strip()
            self.error = fallback or "Tool execution failed"
        return self


class Tool(ABC):
    """Base class for all tools."""

    name: str = ""
    description: str = ""
    parameters: dict[str, Any] = {}

    @abstractmethod
    async def execute(self, **kwargs: Any) -> ToolResult:
        """Execute the tool.

        Args:
            **kwargs: Tool-specific arguments, plus `_runtime_base_path`
                injected by the registry

        Returns:
            ToolResult with success status and content
        """
        pass

    def get_definition(self) -> dict[str, Any]:
        """Get the tool definition for LLM.

        Returns:
            Function-style definition
        """
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }

    def bind_arguments(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Bind model arguments to declared parameters by field name.

        Args:
            arguments: Arguments as sent by the model

        Returns:
            Arguments restricted to declared fields, booleans coerced

        Raises:
            ToolExecutionError if a required field is missing or has the wrong type
        """
        properties: dict[str, Any] = self.parameters.get("properties", {})
        required = self.parameters.get("required", [])
        for field in required:
            if arguments.get(field) is None:
                raise ToolExecutionError(
                    self.name,
                    f"Missing required argument: {field}",
                )

        bound: dict[str, Any] = {}
        for key, value in arguments.items():
            schema = properties.get(key)
            if schema is None:
                log.warning("Dropping undeclared argument", tool=self.name, argument=key)
                continue
            if value is None:
                continue
            bound[key] = self._coerce(key, value, schema.get("type"))
        return bound

    def _coerce(self, key: str, value: Any, expected: str | None) -> Any:
        if expected == "string":
            if not isinstance(value, str):
                raise ToolExecutionError(self.name, f"Argument '{key}' must be a string")
            return value
        if expected == "boolean":
            if isinstance(value, bool):
                return value
            lowered = str(value).strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
            raise ToolExecutionError(self.name, f"Argument '{key}' must be a boolean")
        return value

    @staticmethod
    def resolve_path(raw: str, kwargs: dict[str, Any]) -> Path:
        """Resolve a tool path, anchoring relative paths to the runtime base."""
        path = Path(raw).expanduser()
        if not path.is_absolute():
            base = kwargs.get("_runtime_base_path")
            anchor = Path(base).expanduser() if base is not None else Path.cwd()
            path = anchor / path
        return path.resolve()


class ToolRegistry:
    """Registry for managing available tools."""

    def __init__(self, base_path: Path | str | None = None):
        self._tools: dict[str, Tool] = {}
        self._runtime_base_path = Path.cwd()
        self.set_runtime_base_path(base_path or Path.cwd())

    def set_runtime_base_path(self, base_path: Path | str) -> None:
        """Set runtime base path that relative tool paths resolve against."""
        self._runtime_base_path = Path(base_path).expanduser().resolve()

    @property
    def runtime_base_path(self) -> Path:
        return self._runtime_base_path

    def register(self, tool: Tool) -> None:
        """Register a tool.

        Args:
            tool: Tool instance to register
        """
        if not tool.name:
            raise ValueError("Tool must have a name")

        log.debug("Registering tool", tool=tool.name)
        self._tools[tool.name] = tool

    def unregister(self, name: str) -> None:
        """Unregister a tool.

        Args:
            name: Tool name to unregister
        """
        self._tools.pop(name, None)

    def has_tool(self, name: str) -> bool:
        """Return whether a tool name is currently registered."""
        return name in self._tools

    def get(self, name: str) -> Tool:
        """Get a tool by name.

        Raises:
            ToolNotFoundError if not found
        """
        if name not in self._tools:
            raise ToolNotFoundError(name)
        return self._tools[name]

    def list_tools(self) -> list[str]:
        """List all registered tool names."""
        return list(self._tools)

    def get_definitions(self) -> list[dict[str, Any]]:
        """Get all tool definitions for LLM."""
        return [tool.get_definition() for tool in self._tools.values()]

    async def execute(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Execute a tool by name.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            ToolResult from execution

        Raises:
            ToolNotFoundError if tool not found
            ToolExecutionError if binding or execution fails
        """
        tool = self.get(name)
        bound = tool.bind_arguments(arguments)

        log.info("Executing tool", tool=name, args=bound)
        try:
            result = await tool.execute(**bound, _runtime_base_path=self.runtime_base_path)
        except ToolExecutionError:
            raise
        except Exception as e:
            raise ToolExecutionError(name, str(e)) from e

        if not isinstance(result, ToolResult):
            raise ToolExecutionError(name, "Tool returned invalid result payload")
        log.info("Tool executed", tool=name, success=result.success)
        return result
