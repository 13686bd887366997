"""Delete tool for removing single files."""

import asyncio
from typing import Any

from folio.logging import get_logger
from folio.tools.registry import Tool, ToolResult

log = get_logger(__name__)


class DeleteFileTool(Tool):
    """Delete a file. Directories are refused."""

    name = "deleteFile"
    description = "Deletes a specified file."
    parameters = {
        "type": "object",
        "required": ["filePath"],
        "properties": {
            "filePath": {
                "type": "string",
                "description": "The file path to delete.",
            },
        },
    }

    async def execute(self, filePath: str, **kwargs: Any) -> ToolResult:
        try:
            file_path = self.resolve_path(filePath, kwargs)
            log.info("Deleting file", path=str(file_path))

            await asyncio.to_thread(file_path.unlink)

            log.info("File deleted successfully", path=str(file_path))
            return ToolResult(success=True, content=f"File {filePath} successfully deleted")

        except Exception as e:
            log.error("Delete failed", path=filePath, error=str(e), exc_info=True)
            return ToolResult(success=False, error=str(e))
