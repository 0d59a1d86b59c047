from __future__ import annotations

"""
Domain Constants.

Reserved names shared by the detector, the patcher and the registry emitter.
These mirror the contract of the upstream schema compiler: generated Go files
import the FlatBuffers runtime and embed a `flatbuffers.Table` field.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# RUNTIME SUPPORT LIBRARY
# -----------------------------------------------------------------------------

RUNTIME_MODULE_PATH = "github.com/google/flatbuffers/go"
RUNTIME_DEFAULT_ALIAS = "flatbuffers"
SENTINEL_TYPE_NAME = "Table"

# -----------------------------------------------------------------------------
# GENERATED ARTIFACTS
# -----------------------------------------------------------------------------

ACCESSOR_NAME = "Name"
DEFAULT_PACKAGE_NAME = "flatdata"
REGISTRY_FILE_NAME = "flatdatas_helper.go"
REGISTRY_MAP_NAME = "fbs"
REGISTRY_LOOKUP_FUNC = "GetFlatDataByName"

DEFAULT_LANGUAGE = "go"

DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    r"_test\.go$",
]
