"""Search tool for finding files by name."""

import asyncio
from pathlib import Path
from typing import Any

from folio.logging import get_logger
from folio.tools.registry import Tool, ToolResult

log = get_logger(__name__)


def _search(root: Path, shown: Path, pattern: str, recursive: bool) -> list[str]:
    """Collect entries whose name contains `pattern`, reported relative to `shown`."""
    matches: list[str] = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        reported = shown / entry.name
        if pattern in entry.name:
            matches.append(str(reported))
        if recursive and entry.is_dir() and not entry.is_symlink():
            matches.extend(_search(entry, reported, pattern, recursive))
    return matches


class SearchFilesTool(Tool):
    """Find files whose name contains a pattern."""

    name = "searchFiles"
    description = "Searches for files matching a pattern."
    parameters = {
        "type": "object",
        "required": ["directory", "pattern"],
        "properties": {
            "directory": {
                "type": "string",
                "description": "The directory to search in.",
            },
            "pattern": {
                "type": "string",
                "description": "The search pattern (e.g., filename or extension).",
            },
            "recursive": {
                "type": "boolean",
                "description": "Whether to search recursively in subdirectories.",
            },
        },
    }

    async def execute(
        self,
        directory: str,
        pattern: str,
        recursive: bool = False,
        **kwargs: Any,
    ) -> ToolResult:
        """Search a directory.

        Args:
            directory: Directory to search in
            pattern: Substring matched against entry names
            recursive: Whether to descend into subdirectories

        Returns:
            ToolResult with the list of matching paths
        """
        try:
            root = self.resolve_path(directory, kwargs)
            log.info("Searching files", path=str(root), pattern=pattern, recursive=recursive)

            matches = await asyncio.to_thread(_search, root, Path(directory), pattern, recursive)

            log.info("Search completed", path=str(root), count=len(matches))
            return ToolResult(success=True, content=matches)

        except Exception as e:
            log.error("Search failed", path=directory, pattern=pattern, error=str(e), exc_info=True)
            return ToolResult(success=False, error=str(e))
