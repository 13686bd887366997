"""Read tool for reading file contents."""

import asyncio
from typing import Any

from folio.logging import get_logger
from folio.tools.registry import Tool, ToolResult

log = get_logger(__name__)

MAX_READ_BYTES = 1_000_000


class ReadFileTool(Tool):
    """Read file contents."""

    name = "readFile"
    description = "Reads the content of a file."
    parameters = {
        "type": "object",
        "required": ["filePath"],
        "properties": {
            "filePath": {
                "type": "string",
                "description": "The path to the file to be read.",
            },
        },
    }

    async def execute(self, filePath: str, **kwargs: Any) -> ToolResult:
        """Read a file.

        Args:
            filePath: Path to file

        Returns:
            ToolResult with the file text
        """
        try:
            file_path = self.resolve_path(filePath, kwargs)
            log.info("Reading file", path=str(file_path))

            if not file_path.exists():
                return ToolResult(success=False, error=f"File not found: {filePath}")
            if not file_path.is_file():
                return ToolResult(success=False, error=f"Not a file: {filePath}")

            file_size = file_path.stat().st_size
            if file_size > MAX_READ_BYTES:
                return ToolResult(
                    success=False,
                    error=f"File too large: {file_size} bytes (max {MAX_READ_BYTES})",
                )

            content = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
            log.info("Read file successfully", path=str(file_path), chars=len(content))
            return ToolResult(success=True, content=content)

        except Exception as e:
            log.error("Read failed", path=filePath, error=str(e), exc_info=True)
            return ToolResult(success=False, error=str(e))
