"""Folio - a console file management assistant."""

__version__ = "0.1.0"

from folio.config import Config
from folio.session import Session

__all__ = ["Config", "Session", "__version__"]
