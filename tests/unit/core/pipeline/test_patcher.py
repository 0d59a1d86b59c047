from __future__ import annotations

"""
Unit tests for the identity accessor patcher.

Covers accessor synthesis, the file-level idempotence guard, the opt-in
per-type guard and structural failures.
"""

import pytest

from fbsprocessor.core.analysis.go_parser import parse_go_source
from fbsprocessor.core.pipeline.patcher import has_accessor, patch_tree, render_accessor
from fbsprocessor.domain.errors import PatchError
from go_samples import ITEM_GO

TWO_TYPES_GO = (
    "package flatdata\n"
    "\n"
    "import flatbuffers \"github.com/google/flatbuffers/go\"\n"
    "\n"
    "type Item struct {\n"
    "\t_tab flatbuffers.Table\n"
    "}\n"
    "\n"
    "type ItemKind int8\n"
    "\n"
    "type ItemT struct {\n"
    "\tId int64\n"
    "}\n"
)


def _tree(source: str):
    return parse_go_source(source.encode("utf-8"), "test.go")


def test_render_accessor_go_shape():
    assert render_accessor("Item") == 'func (*Item) Name() string {\n\treturn "Item"\n}'


def test_patch_adds_one_accessor_per_struct():
    tree = _tree(TWO_TYPES_GO)
    before = len(tree.declarations)

    added = patch_tree(tree)

    assert [f.receiver for f in added] == ["Item", "ItemT"]
    assert all(f.name == "Name" and f.synthesized for f in added)
    assert tree.declarations[before:] == added
    assert tree.is_modified


def test_patch_appends_after_existing_declarations():
    tree = _tree(ITEM_GO)
    last_parsed = tree.declarations[-1]

    added = patch_tree(tree)

    assert len(added) == 1
    assert tree.declarations[-2] is last_parsed
    assert tree.declarations[-1] is added[0]
    assert added[0].text == render_accessor("Item")


def test_existing_accessor_anywhere_skips_whole_file():
    source = TWO_TYPES_GO + (
        "\n"
        "func (*ItemT) Name() string {\n"
        "\treturn \"ItemT\"\n"
        "}\n"
    )
    tree = _tree(source)

    assert has_accessor(tree)
    assert patch_tree(tree) == []
    assert not tree.is_modified


def test_free_function_with_accessor_name_also_guards():
    source = TWO_TYPES_GO + "\nfunc Name() string {\n\treturn \"flatdata\"\n}\n"

    assert patch_tree(_tree(source)) == []


def test_per_type_guard_patches_only_missing_types():
    source = TWO_TYPES_GO + (
        "\n"
        "func (*ItemT) Name() string {\n"
        "\treturn \"ItemT\"\n"
        "}\n"
    )
    tree = _tree(source)

    added = patch_tree(tree, per_type=True)

    assert [f.receiver for f in added] == ["Item"]


def test_patch_is_noop_when_rerun_on_same_tree():
    tree = _tree(TWO_TYPES_GO)

    first = patch_tree(tree)
    second = patch_tree(tree)

    assert len(first) == 2
    assert second == []


def test_custom_accessor_name():
    tree = _tree(ITEM_GO)

    added = patch_tree(tree, accessor_name="TypeName")

    assert added[0].text == 'func (*Item) TypeName() string {\n\treturn "Item"\n}'


def test_generic_struct_raises_patch_error():
    source = (
        "package flatdata\n"
        "\n"
        "type Box[T any] struct {\n"
        "\tvalue T\n"
        "}\n"
    )
    tree = _tree(source)

    with pytest.raises(PatchError) as exc_info:
        patch_tree(tree)

    assert "Box" in str(exc_info.value)
    assert not tree.is_modified
