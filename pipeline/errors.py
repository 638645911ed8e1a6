"""Error types raised while turning an upload into a dashboard bundle."""

from __future__ import annotations

from typing import Optional


class DashboardError(ValueError):
    """Base class for failures that abort the current upload.

    The message is meant to be shown to the user as-is.
    """


class UnsupportedFormat(DashboardError):
    """The file extension is not one the dashboard knows how to read."""

    def __init__(self, extension: Optional[str]):
        self.extension = extension or ""
        super().__init__(f"Tipo de arquivo não suportado: {self.extension}")


class ReadError(DashboardError):
    """The file could not be read (I/O failure)."""

    def __init__(self, detail: str = ""):
        message = "Erro ao ler o arquivo"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ParseError(DashboardError):
    """The file was read but its content could not be decoded."""
