import pytest

from folio.exceptions import ToolExecutionError, ToolNotFoundError
from folio.tools import create_default_registry
from folio.tools.registry import Tool, ToolRegistry, ToolResult


class BaseEchoTool(Tool):
    name = "echo"
    description = "Echo back the runtime base"
    parameters = {
        "type": "object",
        "properties": {"text": {"type": "string"}},
        "required": ["text"],
    }

    async def execute(self, text: str, **kwargs) -> ToolResult:
        return ToolResult(success=True, content=f"{text}@{kwargs['_runtime_base_path']}")


class BadResultTool(Tool):
    name = "bad"
    description = "Returns the wrong type"
    parameters = {"type": "object", "properties": {}, "required": []}

    async def execute(self, **kwargs):
        return "not a ToolResult"


def test_tool_result_populates_error_from_content_on_failure() -> None:
    result = ToolResult(success=False, content="disk full")

    assert result.error == "disk full"


def test_tool_result_defaults_error_message() -> None:
    assert ToolResult(success=False).error == "Tool execution failed"


def test_default_registry_catalog_schemas():
    registry = create_default_registry()
    definitions = {d["name"]: d for d in registry.get_definitions()}

    assert set(definitions) == {
        "listFiles",
        "readFile",
        "writeFile",
        "moveFile",
        "copyFile",
        "deleteFile",
        "searchFiles",
        "createDirectory",
    }
    search = definitions["searchFiles"]["parameters"]
    assert search["required"] == ["directory", "pattern"]
    assert search["properties"]["recursive"]["type"] == "boolean"
    assert definitions["writeFile"]["parameters"]["required"] == ["filePath", "content"]


def test_get_unknown_tool_raises():
    with pytest.raises(ToolNotFoundError):
        ToolRegistry().get("missing")


@pytest.mark.asyncio
async def test_execute_injects_runtime_base(tmp_path):
    registry = ToolRegistry(base_path=tmp_path)
    registry.register(BaseEchoTool())

    result = await registry.execute("echo", {"text": "hi"})

    assert result.content == f"hi@{tmp_path.resolve()}"


@pytest.mark.asyncio
async def test_execute_rejects_invalid_result_payload():
    registry = ToolRegistry()
    registry.register(BadResultTool())

    with pytest.raises(ToolExecutionError):
        await registry.execute("bad", {})


def test_register_requires_name():
    tool = BaseEchoTool()
    tool.name = ""

    with pytest.raises(ValueError):
        ToolRegistry().register(tool)


def test_unregister_removes_tool():
    registry = ToolRegistry()
    registry.register(BaseEchoTool())
    registry.unregister("echo")

    assert registry.has_tool("echo") is False
    assert registry.list_tools() == []
