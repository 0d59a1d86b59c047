from __future__ import annotations

"""
Registry Emission Service.

Renders the single helper file that maps every collected record type name to
its reflected Go type and exposes a lookup function that constructs a fresh
zero value by name. Names are sorted before rendering so the output is
byte-stable regardless of directory iteration order.
"""

import logging
import os
import re
from string import Template
from typing import Iterable, List, Optional

from fbsprocessor.domain.constants import (
    DEFAULT_PACKAGE_NAME,
    REGISTRY_FILE_NAME,
    REGISTRY_LOOKUP_FUNC,
    REGISTRY_MAP_NAME,
)
from fbsprocessor.domain.errors import TemplateError, WriteError
from fbsprocessor.domain.records import RecordTypeSet

logger = logging.getLogger(__name__)

_IDENTIFIER_RX = re.compile(r"^[^\W\d]\w*$")

# -----------------------------------------------------------------------------
# TEMPLATES
# -----------------------------------------------------------------------------

REGISTRY_TEMPLATE = f"""package $package

import (
\t"reflect"
)

var {REGISTRY_MAP_NAME} = map[string]reflect.Type{{$entries
}}

func {REGISTRY_LOOKUP_FUNC}(name string) any {{
\tif data, ok := {REGISTRY_MAP_NAME}[name]; ok {{
\t\treturn reflect.New(data).Interface()
\t}}
\treturn nil
}}
"""

ENTRY_TEMPLATE = '\n\t"$name": reflect.TypeOf((*$name)(nil)).Elem(),'


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_template(template_path: str) -> str:
    """
    Read a custom registry template.

    Raises:
        TemplateError: If the file cannot be read.
    """
    try:
        with open(template_path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"Could not read template: {e}", template_path) from e


def render_registry(
        names: Iterable[str],
        package: str = DEFAULT_PACKAGE_NAME,
        template: Optional[str] = None,
) -> str:
    """
    Render the registry source for a set of record type names.

    Args:
        names: Record type names, in any order.
        package: Go package clause of the generated file.
        template: Optional template text with `$package` and `$entries`.

    Returns:
        str: Go source of the registry file.

    Raises:
        TemplateError: On invalid identifiers or an unrenderable template.
    """
    sorted_names: List[str] = sorted(names)

    for name in [package] + sorted_names:
        if not name or not _IDENTIFIER_RX.match(name):
            raise TemplateError(f"'{name}' is not a valid Go identifier")

    entries = "".join(Template(ENTRY_TEMPLATE).substitute(name=n) for n in sorted_names)

    try:
        return Template(template or REGISTRY_TEMPLATE).substitute(package=package, entries=entries)
    except KeyError as e:
        raise TemplateError(f"Unknown template placeholder {e}") from e
    except ValueError as e:
        raise TemplateError(f"Malformed template: {e}") from e


def emit_registry(
        types: RecordTypeSet,
        output_dir: str,
        file_name: str = REGISTRY_FILE_NAME,
        package: str = DEFAULT_PACKAGE_NAME,
        template: Optional[str] = None,
        dry_run: bool = False,
) -> str:
    """
    Render and write the registry file into the output directory.

    The registry is all-or-nothing: content is fully rendered before the
    file is created.

    Args:
        types: Accumulated record types of the run.
        output_dir: Directory that receives the registry file.
        file_name: Registry file name.
        package: Go package clause.
        template: Optional custom template text.
        dry_run: Render only, do not write.

    Returns:
        str: Path of the registry file.

    Raises:
        TemplateError: If rendering fails.
        WriteError: If the file cannot be created.
    """
    content = render_registry(types.sorted_names(), package=package, template=template)
    target = os.path.join(output_dir, file_name)

    if dry_run:
        logger.info(f"[dry-run] Registry with {len(types)} types would be written to {target}")
        return target

    try:
        with open(target, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as e:
        raise WriteError(f"Failed to create registry: {e}", target) from e

    logger.info(f"Registry with {len(types)} record types written to {target}")
    return target
