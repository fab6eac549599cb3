"""Exceptions raised while converting HTML into Haml."""

from __future__ import annotations

from typing import Optional


class HamlError(Exception):
    """Base error carrying an optional 1-based line number."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} on line {self.line}"


class HamlSyntaxError(HamlError, SyntaxError):
    pass


class EncodingError(HamlError):
    pass


class ConfigError(HamlError):
    pass


class UnsupportedNodeError(HamlError, TypeError):
    """Raised for document nodes that have no Haml representation."""


__all__ = [
    "ConfigError",
    "EncodingError",
    "HamlError",
    "HamlSyntaxError",
    "UnsupportedNodeError",
]
