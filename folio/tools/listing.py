"""Directory tools: list entries and create directories."""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Any

from folio.logging import get_logger
from folio.tools.registry import Tool, ToolResult

log = get_logger(__name__)


def _describe_entries(directory: Path) -> list[str]:
    lines = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        stats = entry.stat()
        kind = "[DIR]" if entry.is_dir() else "[FILE]"
        modified = datetime.fromtimestamp(stats.st_mtime).isoformat(timespec="seconds")
        lines.append(f"{kind} {entry.name} ({stats.st_size} bytes, modified: {modified})")
    return lines


class ListFilesTool(Tool):
    """List a directory with type, size and modification time per entry."""

    name = "listFiles"
    description = "Lists files in a specified directory."
    parameters = {
        "type": "object",
        "required": ["dirPath"],
        "properties": {
            "dirPath": {
                "type": "string",
                "description": "The path of the directory to list files from.",
            },
        },
    }

    async def execute(self, dirPath: str, **kwargs: Any) -> ToolResult:
        try:
            directory = self.resolve_path(dirPath, kwargs)
            log.info("Listing files", path=str(directory))

            entries = await asyncio.to_thread(_describe_entries, directory)

            log.info("Files found", path=str(directory), count=len(entries))
            return ToolResult(success=True, content=entries)

        except Exception as e:
            log.error("Listing failed", path=dirPath, error=str(e), exc_info=True)
            return ToolResult(success=False, error=str(e))


class CreateDirectoryTool(Tool):
    """Create a directory, including missing parents."""

    name = "createDirectory"
    description = "Creates a new directory."
    parameters = {
        "type": "object",
        "required": ["dirPath"],
        "properties": {
            "dirPath": {
                "type": "string",
                "description": "The path of the directory to create.",
            },
        },
    }

    async def execute(self, dirPath: str, **kwargs: Any) -> ToolResult:
        try:
            directory = self.resolve_path(dirPath, kwargs)
            log.info("Creating directory", path=str(directory))

            await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)

            log.info("Directory created successfully", path=str(directory))
            return ToolResult(success=True, content=f"Directory {dirPath} successfully created")

        except Exception as e:
            log.error("Create directory failed", path=dirPath, error=str(e), exc_info=True)
            return ToolResult(success=False, error=str(e))
