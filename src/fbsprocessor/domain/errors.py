from __future__ import annotations

"""
Processing Error Hierarchy.

Every failure raised by the processing components carries the phase it
happened in and, where one exists, the offending file path. The orchestrator
stops on the first error except `NotARecordFile`, which is a skip signal.
"""

from typing import Iterable, Optional


class ProcessorError(Exception):
    """Base class for all post-processing failures."""

    phase: str = "process"

    def __init__(self, message: str, path: Optional[str] = None, phase: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        if phase:
            self.phase = phase

    def __str__(self) -> str:
        if self.path:
            return f"[{self.phase}] {self.path}: {self.message}"
        return f"[{self.phase}] {self.message}"


class ConfigError(ProcessorError):
    phase = "config"


class UnsupportedLanguageError(ConfigError):
    """Raised when the language selector names no registered processor."""

    def __init__(self, language: str, available: Iterable[str]):
        names = ", ".join(sorted(available)) or "none"
        super().__init__(f"Unsupported language '{language}' (available: {names})")
        self.language = language


class ParseError(ProcessorError):
    """
    Malformed source file.

    Attributes:
        line: 1-based line of the first syntax error, if known.
        column: 1-based column of the first syntax error, if known.
    """
    phase = "parse"

    def __init__(
            self,
            message: str,
            path: Optional[str] = None,
            line: Optional[int] = None,
            column: Optional[int] = None,
    ):
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message, path)
        self.line = line
        self.column = column


class ReadError(ParseError):
    """The source file could not be read or decoded."""


class NotARecordFile(ProcessorError):
    """Skip signal: the file is not a generated record-type file."""
    phase = "detect"

    def __init__(self, path: Optional[str] = None):
        super().__init__("FlatBuffers runtime not imported or no table field found", path)


class PatchError(ProcessorError):
    phase = "patch"


class WriteError(ProcessorError):
    phase = "write"


class TemplateError(ProcessorError):
    phase = "registry"


class DuplicateRecordTypeError(ProcessorError):
    """Two files contributed the same record type name."""
    phase = "collect"

    def __init__(self, name: str, first_path: str, second_path: str):
        super().__init__(
            f"Record type '{name}' already declared in {first_path}",
            second_path,
        )
        self.name = name
        self.first_path = first_path
