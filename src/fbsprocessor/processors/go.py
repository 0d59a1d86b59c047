from __future__ import annotations

"""
Go FlatBuffers Processor.

Post-processes the Go sources generated for FlatBuffers schemas: every
record file gets a `Name()` accessor per struct type, and a single helper
file maps each record type name to its reflected type.
"""

import logging
from typing import Optional

from fbsprocessor.core.analysis.detector import record_type_name
from fbsprocessor.core.analysis.go_parser import parse_go_file
from fbsprocessor.core.pipeline.patcher import patch_tree
from fbsprocessor.core.pipeline.registry import emit_registry, load_template
from fbsprocessor.core.pipeline.writer import write_source
from fbsprocessor.domain.constants import (
    ACCESSOR_NAME,
    DEFAULT_PACKAGE_NAME,
    REGISTRY_FILE_NAME,
    RUNTIME_MODULE_PATH,
    SENTINEL_TYPE_NAME,
)
from fbsprocessor.domain.errors import NotARecordFile
from fbsprocessor.domain.records import RecordTypeSet
from fbsprocessor.processors.base import FileOutcome, LanguageProcessor

logger = logging.getLogger(__name__)


class GoProcessor(LanguageProcessor):
    """
    Handles post-processing of Go FlatBuffers files.

    Args:
        runtime_module: Import path that marks generated files.
        sentinel_type: Marker type exported by the runtime module.
        accessor_name: Name of the synthesized identity method.
        per_type: Evaluate the accessor guard per type instead of per file.
        package_name: Package clause of the registry. Inferred from the
            first record file when None.
        registry_file_name: Name of the emitted registry file.
        registry_template: Optional path to a custom registry template.
    """

    def __init__(
            self,
            runtime_module: str = RUNTIME_MODULE_PATH,
            sentinel_type: str = SENTINEL_TYPE_NAME,
            accessor_name: str = ACCESSOR_NAME,
            per_type: bool = False,
            package_name: Optional[str] = None,
            registry_file_name: str = REGISTRY_FILE_NAME,
            registry_template: Optional[str] = None,
    ):
        self.runtime_module = runtime_module
        self.sentinel_type = sentinel_type
        self.accessor_name = accessor_name
        self.per_type = per_type
        self.package_name = package_name
        self._registry_file_name = registry_file_name
        self.registry_template = registry_template
        self._inferred_package: Optional[str] = None

    @property
    def extension(self) -> str:
        return ".go"

    @property
    def registry_file_name(self) -> str:
        return self._registry_file_name

    def pre_process(self, input_dir: str) -> None:
        self._inferred_package = None

    def process_file(self, file_path: str, types: RecordTypeSet, dry_run: bool = False) -> FileOutcome:
        tree = parse_go_file(file_path)

        name = record_type_name(tree, self.runtime_module, self.sentinel_type)
        if name is None:
            raise NotARecordFile(file_path)
        types.add(name, file_path)

        if self._inferred_package is None and tree.package:
            self._inferred_package = tree.package

        added = patch_tree(tree, self.accessor_name, per_type=self.per_type)

        if added and not dry_run:
            write_source(tree)

        return FileOutcome(
            path=file_path,
            record_type=name,
            added=[func.receiver or "" for func in added],
        )

    def post_process(self, output_dir: str, types: RecordTypeSet, dry_run: bool = False) -> Optional[str]:
        template = load_template(self.registry_template) if self.registry_template else None
        package = self.package_name or self._inferred_package or DEFAULT_PACKAGE_NAME

        return emit_registry(
            types,
            output_dir,
            file_name=self.registry_file_name,
            package=package,
            template=template,
            dry_run=dry_run,
        )
