"""Custom exceptions for Folio."""


class FolioError(Exception):
    """Base exception for Folio."""

    pass


class ConfigurationError(FolioError):
    """Configuration-related errors."""

    pass


class LLMError(FolioError):
    """LLM-related errors."""

    pass


class LLMAPIError(LLMError):
    """LLM API errors (bad status, transport failure, etc.)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ToolError(FolioError):
    """Tool execution errors."""

    pass


class ToolExecutionError(ToolError):
    """Tool execution failed."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(f"Tool '{tool_name}' failed: {message}")
        self.tool_name = tool_name


class ToolNotFoundError(ToolError):
    """Tool not found in registry."""

    def __init__(self, tool_name: str):
        super().__init__(f"Tool not found: {tool_name}")
        self.tool_name = tool_name


class TranscriptError(FolioError):
    """A turn would break the transcript ordering rules."""

    pass


class SessionError(FolioError):
    """Session-related errors."""

    pass


class SessionBusyError(SessionError):
    """A submit call is already running on this session."""

    def __init__(self):
        super().__init__("Session is already processing a message")
