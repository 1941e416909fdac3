import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import BaseModel, Field

__all__ = ("SessionLogFile",)


class SessionLogFile(BaseModel):
    """
    Size-rotated JSON-lines log of one paginator session, written to `<directory>/<name>.log`.

    Sessions sharing a `name` share the file; give each session its own name to keep them apart.
    """

    directory: str | Path
    name: str = "paginator"
    """Logger name and file stem."""
    max_bytes: int = Field(default=1_048_576, ge=0)
    """Rotate once the file reaches this size. 0 never rotates."""
    backup_count: int = Field(default=3, ge=0)

    @property
    def path(self) -> Path:
        return Path(self.directory) / f"{self.name}.log"

    def get_handler(self) -> logging.Handler:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            self.path,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        return handler
