from .file import SessionLogFile

__all__ = ("SessionLogFile",)
