"""Load instruction templates from disk.

Supports a two-layer override system:
  1. Personal overrides in ``~/.folio/instructions/`` (highest priority)
  2. Packaged defaults in ``folio/prompts/``
"""

from __future__ import annotations

import os
from pathlib import Path


_PERSONAL_DIR = Path("~/.folio/instructions").expanduser()


class InstructionLoader:
    """Read instruction templates with personal-override support."""

    def __init__(
        self,
        base_dir: Path | str | None = None,
        personal_dir: Path | str | None = None,
    ):
        self.base_dir = self._resolve_base_dir(base_dir)
        self.personal_dir: Path = (
            Path(personal_dir).expanduser().resolve()
            if personal_dir is not None
            else _PERSONAL_DIR.resolve()
        )
        self._cache: dict[str, str] = {}

    @staticmethod
    def _resolve_base_dir(base_dir: Path | str | None) -> Path:
        if base_dir is not None:
            return Path(base_dir).expanduser().resolve()
        env_dir = os.getenv("FOLIO_INSTRUCTIONS_DIR")
        if env_dir:
            return Path(env_dir).expanduser().resolve()
        return (Path(__file__).resolve().parent / "prompts").resolve()

    def _path(self, name: str) -> Path:
        """Return the effective file path, preferring the personal override."""
        personal = self.personal_dir / name
        if personal.is_file():
            return personal
        return self.base_dir / name

    def is_overridden(self, name: str) -> bool:
        return (self.personal_dir / name).is_file()

    def load(self, name: str) -> str:
        """Load instruction template content by filename."""
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self._path(name)
        if not path.is_file():
            raise FileNotFoundError(f"Instruction template not found: {path}")
        content = path.read_text(encoding="utf-8").strip()
        self._cache[name] = content
        return content
