"""Error taxonomy for the Dockle engine."""

from pathlib import Path
from typing import Optional, Union


class DockleError(Exception):
    """Base class for every error raised by the engine."""


class IOUnavailable(DockleError):
    """A path is missing, not of the expected kind, or cannot be read or written."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ParseError(DockleError):
    """A compose document is not valid structured-mapping syntax."""

    def __init__(self, path: Optional[Union[str, Path]], reason: str):
        self.path = Path(path) if path is not None else None
        self.reason = reason
        where = str(self.path) if self.path is not None else "<compose document>"
        super().__init__(f"{where}: {reason}")
