"""Move and copy tools."""

import asyncio
import shutil
from typing import Any

from folio.logging import get_logger
from folio.tools.registry import Tool, ToolResult

log = get_logger(__name__)


class MoveFileTool(Tool):
    """Move or rename a file."""

    name = "moveFile"
    description = "Moves a file to a new location."
    parameters = {
        "type": "object",
        "required": ["sourcePath", "destinationPath"],
        "properties": {
            "sourcePath": {
                "type": "string",
                "description": "The current path of the file.",
            },
            "destinationPath": {
                "type": "string",
                "description": "The new location for the file.",
            },
        },
    }

    async def execute(self, sourcePath: str, destinationPath: str, **kwargs: Any) -> ToolResult:
        try:
            source = self.resolve_path(sourcePath, kwargs)
            destination = self.resolve_path(destinationPath, kwargs)
            log.info("Moving file", source=str(source), destination=str(destination))

            if not source.exists():
                return ToolResult(success=False, error=f"File not found: {sourcePath}")
            await asyncio.to_thread(shutil.move, str(source), str(destination))

            log.info("File moved successfully", source=str(source), destination=str(destination))
            return ToolResult(
                success=True,
                content=f"File successfully moved from {sourcePath} to {destinationPath}",
            )

        except Exception as e:
            log.error("Move failed", source=sourcePath, error=str(e), exc_info=True)
            return ToolResult(success=False, error=str(e))


class CopyFileTool(Tool):
    """Copy a file's contents to a new path."""

    name = "copyFile"
    description = "Copies a file to a new location."
    parameters = {
        "type": "object",
        "required": ["sourcePath", "destinationPath"],
        "properties": {
            "sourcePath": {
                "type": "string",
                "description": "The source file path.",
            },
            "destinationPath": {
                "type": "string",
                "description": "The destination file path.",
            },
        },
    }

    async def execute(self, sourcePath: str, destinationPath: str, **kwargs: Any) -> ToolResult:
        try:
            source = self.resolve_path(sourcePath, kwargs)
            destination = self.resolve_path(destinationPath, kwargs)
            log.info("Copying file", source=str(source), destination=str(destination))

            await asyncio.to_thread(shutil.copyfile, source, destination)

            log.info("File copied successfully", source=str(source), destination=str(destination))
            return ToolResult(
                success=True,
                content=f"File successfully copied from {sourcePath} to {destinationPath}",
            )

        except Exception as e:
            log.error("Copy failed", source=sourcePath, error=str(e), exc_info=True)
            return ToolResult(success=False, error=str(e))
