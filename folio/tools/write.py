"""Write tool for writing file contents."""

import asyncio
from typing import Any

from folio.logging import get_logger
from folio.tools.registry import Tool, ToolResult

log = get_logger(__name__)


class WriteFileTool(Tool):
    """Write content to files."""

    name = "writeFile"
    description = "Writes content to a file."
    parameters = {
        "type": "object",
        "required": ["filePath", "content"],
        "properties": {
            "filePath": {
                "type": "string",
                "description": "The path to the file to be written.",
            },
            "content": {
                "type": "string",
                "description": "The content to write to the file.",
            },
        },
    }

    async def execute(self, filePath: str, content: str, **kwargs: Any) -> ToolResult:
        """Create or overwrite a file. The parent directory must exist."""
        try:
            file_path = self.resolve_path(filePath, kwargs)
            log.info("Writing to file", path=str(file_path))

            await asyncio.to_thread(file_path.write_text, content, encoding="utf-8")

            log.info("File written successfully", path=str(file_path), chars=len(content))
            return ToolResult(success=True, content=f"File successfully written to {filePath}")

        except Exception as e:
            log.error("Write failed", path=filePath, error=str(e), exc_info=True)
            return ToolResult(success=False, error=str(e))
