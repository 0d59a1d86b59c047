from __future__ import annotations

"""
Language Processor Interface.

A processor owns the per-file pipeline of one target language and the
registry emitted at the end of a run. The engine only talks to this
interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from fbsprocessor.domain.records import RecordTypeSet


@dataclass(frozen=True)
class FileOutcome:
    """
    Result of processing one record file.

    Attributes:
        path: Processed file.
        record_type: Name contributed to the registry.
        added: Types that received a new accessor.
    """
    path: str
    record_type: str
    added: List[str] = field(default_factory=list)

    @property
    def patched(self) -> bool:
        return bool(self.added)


class LanguageProcessor(ABC):
    """Post-processor for the generated sources of one language."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """Source file extension handled by this processor."""

    @property
    @abstractmethod
    def registry_file_name(self) -> str:
        """Name of the registry file emitted by `post_process`."""

    def pre_process(self, input_dir: str) -> None:
        """Hook run once before the directory walk."""

    @abstractmethod
    def process_file(self, file_path: str, types: RecordTypeSet, dry_run: bool = False) -> FileOutcome:
        """
        Parse, detect, patch and write one file.

        Raises:
            NotARecordFile: If the file is not a generated record file.
            ProcessorError: On any fatal failure.
        """

    @abstractmethod
    def post_process(self, output_dir: str, types: RecordTypeSet, dry_run: bool = False) -> Optional[str]:
        """Emit the registry for the collected types. Returns its path."""
