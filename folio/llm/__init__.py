"""Ollama provider - direct HTTP calls to Ollama API."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx

from folio.exceptions import LLMAPIError, LLMError
from folio.logging import get_logger

log = get_logger(__name__)


OLLAMA_NATIVE_BASE_URL = "http://127.0.0.1:11434"
RESPONSE_PREVIEW_CHARS = 100


def tool_call_id_for(name: str, position: int) -> str:
    """Id of the `position`-th (zero-based) action in its requesting turn."""
    return f"{name}_{position}"


@dataclass(frozen=True)
class ToolCall:
    """A tool call from the LLM."""

    id: str
    name: str
    arguments: dict[str, Any]


@dataclass(frozen=True)
class Message:
    """A message in the conversation."""

    role: str  # "system", "user", "assistant", "tool"
    content: str = ""
    tool_calls: tuple[ToolCall, ...] = ()
    tool_call_id: str | None = None
    tool_name: str | None = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


@dataclass
class LLMResponse:
    """Response from the LLM."""

    content: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    model: str = ""
    usage: dict[str, int] = field(default_factory=dict)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    def to_message(self) -> Message:
        """Return the reply as an assistant turn, with positional tool call ids."""
        return Message(
            role="assistant",
            content=self.content or "",
            tool_calls=tuple(
                ToolCall(id=tool_call_id_for(tc.name, index), name=tc.name, arguments=tc.arguments)
                for index, tc in enumerate(self.tool_calls)
            ),
        )


@dataclass
class ToolDefinition:
    """Definition of a tool for the LLM."""

    name: str
    description: str
    parameters: dict[str, Any]  # JSON Schema


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        tools: list[ToolDefinition] | list[dict[str, Any]] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        pass

    async def close(self) -> None:
        """Release provider resources."""
        return None


class OllamaProvider(LLMProvider):
    """Direct Ollama API provider."""

    def __init__(
        self,
        model: str = "llama3.1:8b",
        base_url: str = OLLAMA_NATIVE_BASE_URL,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        api_key: str | None = None,
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize Ollama provider.

        Args:
            model: Ollama model name (e.g., 'llama3.1:8b', 'qwen3:32b')
            base_url: Ollama API base URL
            temperature: Sampling temperature
            max_tokens: Max tokens to generate
            api_key: Optional API key (Ollama usually doesn't need one locally)
            timeout: Request timeout in seconds
            client: Optional preconfigured HTTP client
        """
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.api_key = api_key

        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
        )

    def _convert_messages(self, messages: list[Message]) -> list[dict[str, Any]]:
        """Convert messages to Ollama format."""
        result = []

        for msg in messages:
            if msg.role in ("system", "user"):
                result.append({"role": msg.role, "content": msg.content or ""})
            elif msg.role == "assistant":
                entry: dict[str, Any] = {"role": "assistant", "content": msg.content or ""}
                if msg.tool_calls:
                    entry["tool_calls"] = [
                        {"function": {"name": tc.name, "arguments": tc.arguments}}
                        for tc in msg.tool_calls
                    ]
                result.append(entry)
            elif msg.role == "tool":
                entry = {"role": "tool", "content": msg.content or ""}
                if msg.tool_name:
                    entry["tool_name"] = msg.tool_name
                if msg.tool_call_id:
                    entry["tool_call_id"] = msg.tool_call_id
                result.append(entry)

        return result

    def _convert_tools(self, tools: list[ToolDefinition] | list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Convert tools to Ollama format."""
        result = []
        for tool in tools:
            # Handle both ToolDefinition objects and dicts
            if isinstance(tool, dict):
                name = tool.get("name")
                description = tool.get("description", "")
                parameters = tool.get("parameters", {})
            else:
                name = tool.name
                description = tool.description or ""
                parameters = tool.parameters or {}

            if name:
                result.append({
                    "type": "function",
                    "function": {
                        "name": name,
                        "description": description or "",
                        "parameters": parameters or {},
                    },
                })
        return result

    @staticmethod
    def _parse_tool_calls(raw_calls: list[dict[str, Any]]) -> list[ToolCall]:
        """Parse Ollama tool calls.

        Ids are always `<name>_<index>` so tool results can be matched to the
        request by name and position within the turn.
        """
        tool_calls = []
        for index, tc in enumerate(raw_calls):
            function = tc.get("function", {}) or {}
            name = str(function.get("name", ""))
            arguments = function.get("arguments", {})
            if isinstance(arguments, str):
                try:
                    arguments = json.loads(arguments)
                except json.JSONDecodeError:
                    arguments = {"raw": arguments}
            tool_calls.append(ToolCall(
                id=tool_call_id_for(name, index),
                name=name,
                arguments=arguments if isinstance(arguments, dict) else {},
            ))
        return tool_calls

    async def complete(
        self,
        messages: list[Message],
        tools: list[ToolDefinition] | list[dict[str, Any]] | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate a completion."""
        url = f"{self.base_url}/api/chat"

        ollama_messages = self._convert_messages(messages)
        ollama_tools = self._convert_tools(tools) if tools else None

        options: dict[str, Any] = {
            "temperature": temperature if temperature is not None else self.temperature,
        }
        if max_tokens or self.max_tokens:
            options["num_predict"] = max_tokens or self.max_tokens

        body: dict[str, Any] = {
            "model": self.model,
            "messages": ollama_messages,
            "stream": False,
            "options": options,
        }

        if ollama_tools:
            body["tools"] = ollama_tools

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            log.debug("Calling Ollama", model=self.model, url=url, msg_count=len(ollama_messages))
            response = await self.client.post(url, json=body, headers=headers)
            log.debug("Ollama response status", status=response.status_code)
        except httpx.HTTPError as e:
            raise LLMAPIError(f"Ollama HTTP error: {e}") from e

        if not response.is_success:
            raise LLMAPIError(
                f"Ollama API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise LLMError(f"Ollama response decode error: {e}") from e

        message = data.get("message") or {}
        content = message.get("content") or ""
        tool_calls = self._parse_tool_calls(message.get("tool_calls") or [])

        usage = {
            "prompt_tokens": data.get("prompt_eval_count", 0),
            "completion_tokens": data.get("eval_count", 0),
            "total_tokens": (data.get("prompt_eval_count", 0) + data.get("eval_count", 0)),
        }

        log.info(
            "Received AI response",
            preview=json.dumps(content)[:RESPONSE_PREVIEW_CHARS],
            tool_calls=[tc.name for tc in tool_calls],
        )
        return LLMResponse(
            content=content,
            tool_calls=tool_calls,
            model=data.get("model") or self.model,
            usage=usage,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()


def create_provider(
    provider: str = "ollama",
    model: str = "llama3.1:8b",
    api_key: str | None = None,
    base_url: str | None = None,
    temperature: float = 0.7,
    max_tokens: int = 4096,
    timeout: float = 120.0,
) -> LLMProvider:
    """Create an LLM provider.

    Args:
        provider: Provider name (only 'ollama' is supported)
        model: Model name
        api_key: Optional API key
        base_url: Optional base URL
        temperature: Default temperature
        max_tokens: Default max tokens
        timeout: Request timeout in seconds

    Returns:
        Configured LLMProvider instance
    """
    if provider == "ollama":
        return OllamaProvider(
            model=model,
            base_url=base_url or OLLAMA_NATIVE_BASE_URL,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=api_key,
            timeout=timeout,
        )
    raise ValueError(f"Provider '{provider}' not supported. Use 'ollama'.")


# Global provider instance
_provider: LLMProvider | None = None


def get_provider() -> LLMProvider:
    """Get the global LLM provider instance."""
    global _provider
    if _provider is None:
        from folio.config import get_config
        cfg = get_config()
        _provider = create_provider(
            provider=cfg.model.provider,
            model=cfg.model.model,
            base_url=cfg.model.base_url or None,
            temperature=cfg.model.temperature,
            max_tokens=cfg.model.max_tokens,
            api_key=cfg.model.api_key or None,
            timeout=cfg.model.timeout,
        )
    return _provider
