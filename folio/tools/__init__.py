"""Tools package for Folio."""

from pathlib import Path

from folio.tools.registry import Tool, ToolRegistry, ToolResult
from folio.tools.read import ReadFileTool
from folio.tools.write import WriteFileTool
from folio.tools.delete import DeleteFileTool
from folio.tools.transfer import CopyFileTool, MoveFileTool
from folio.tools.listing import CreateDirectoryTool, ListFilesTool
from folio.tools.search import SearchFilesTool


def create_default_registry(base_path: Path | str | None = None) -> ToolRegistry:
    """Build a registry holding the file-system capabilities."""
    registry = ToolRegistry(base_path=base_path)
    for tool in (
        ListFilesTool(),
        ReadFileTool(),
        WriteFileTool(),
        MoveFileTool(),
        CopyFileTool(),
        DeleteFileTool(),
        SearchFilesTool(),
        CreateDirectoryTool(),
    ):
        registry.register(tool)
    return registry


__all__ = [
    "Tool",
    "ToolRegistry",
    "ToolResult",
    "create_default_registry",
    "ListFilesTool",
    "ReadFileTool",
    "WriteFileTool",
    "MoveFileTool",
    "CopyFileTool",
    "DeleteFileTool",
    "SearchFilesTool",
    "CreateDirectoryTool",
]
