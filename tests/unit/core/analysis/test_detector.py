from __future__ import annotations

"""
Unit tests for record file detection.

Both signals are required: the runtime import and a `<alias>.Table` struct
field or method signature. Each signal alone must never classify a file as a
record file.
"""

from fbsprocessor.core.analysis.detector import (
    is_record_file,
    record_type_name,
    runtime_alias,
)
from fbsprocessor.core.analysis.go_parser import parse_go_source
from go_samples import ENUM_GO, HELPER_GO, ITEM_GO, VEC3_GO, record_source


def _tree(source: str):
    return parse_go_source(source.encode("utf-8"), "test.go")


def test_generated_table_is_record_file():
    tree = _tree(ITEM_GO)

    assert is_record_file(tree) is True
    assert record_type_name(tree) == "Item"


def test_import_without_sentinel_field_is_not_record_file():
    source = (
        "package flatdata\n"
        "\n"
        "import flatbuffers \"github.com/google/flatbuffers/go\"\n"
        "\n"
        "func ItemStart(builder *flatbuffers.Builder) {\n"
        "\tbuilder.StartObject(1)\n"
        "}\n"
    )
    assert is_record_file(_tree(source)) is False


def test_sentinel_field_without_import_is_not_record_file():
    source = (
        "package flatdata\n"
        "\n"
        "type Item struct {\n"
        "\t_tab flatbuffers.Table\n"
        "}\n"
    )
    tree = _tree(source)

    assert runtime_alias(tree) is None
    assert is_record_file(tree) is False


def test_files_without_runtime_import_are_skipped():
    assert is_record_file(_tree(HELPER_GO)) is False
    assert is_record_file(_tree(ENUM_GO)) is False


def test_unaliased_import_uses_package_name():
    source = record_source("Item").replace(
        "\tflatbuffers \"github.com/google/flatbuffers/go\"",
        "\t\"github.com/google/flatbuffers/go\"",
    )
    tree = _tree(source)

    assert runtime_alias(tree) == "flatbuffers"
    assert is_record_file(tree) is True


def test_custom_alias_must_match_field_qualifier():
    aliased = (
        "package flatdata\n"
        "\n"
        "import fb \"github.com/google/flatbuffers/go\"\n"
        "\n"
        "type Item struct {\n"
        "\t_tab fb.Table\n"
        "}\n"
    )
    assert is_record_file(_tree(aliased)) is True

    mismatched = aliased.replace("_tab fb.Table", "_tab flatbuffers.Table")
    assert is_record_file(_tree(mismatched)) is False


def test_import_path_must_match_exactly():
    source = record_source("Item").replace(
        "github.com/google/flatbuffers/go", "github.com/example/flatbuffers/go"
    )
    assert is_record_file(_tree(source)) is False


def test_blank_import_cannot_qualify_fields():
    source = (
        "package flatdata\n"
        "\n"
        "import _ \"github.com/google/flatbuffers/go\"\n"
        "\n"
        "type Item struct {\n"
        "\t_tab flatbuffers.Table\n"
        "}\n"
    )
    assert is_record_file(_tree(source)) is False


def test_pointer_to_table_is_not_sentinel():
    source = (
        "package flatdata\n"
        "\n"
        "import flatbuffers \"github.com/google/flatbuffers/go\"\n"
        "\n"
        "type Item struct {\n"
        "\t_tab *flatbuffers.Table\n"
        "}\n"
        "\n"
        "func (rcv *Item) Union(obj *flatbuffers.Table) bool {\n"
        "\treturn obj != nil\n"
        "}\n"
    )
    assert is_record_file(_tree(source)) is False


def test_other_runtime_types_are_not_sentinel():
    source = (
        "package flatdata\n"
        "\n"
        "import flatbuffers \"github.com/google/flatbuffers/go\"\n"
        "\n"
        "type Vec3 struct {\n"
        "\t_tab flatbuffers.Struct\n"
        "}\n"
    )
    assert is_record_file(_tree(source)) is False


def test_struct_type_with_table_accessor_is_record_file():
    tree = _tree(VEC3_GO)

    assert is_record_file(tree) is True
    assert record_type_name(tree) == "Vec3"


def test_table_in_free_function_signature_does_not_name_a_record():
    source = (
        "package flatdata\n"
        "\n"
        "import flatbuffers \"github.com/google/flatbuffers/go\"\n"
        "\n"
        "type Options struct {\n"
        "\tverbose bool\n"
        "}\n"
        "\n"
        "func Inspect(tab flatbuffers.Table) int {\n"
        "\treturn len(tab.Bytes)\n"
        "}\n"
    )
    assert record_type_name(_tree(source)) is None


def test_struct_field_wins_over_method_signature():
    source = (
        "package flatdata\n"
        "\n"
        "import flatbuffers \"github.com/google/flatbuffers/go\"\n"
        "\n"
        "type Wrapper struct {\n"
        "\tinner Item\n"
        "}\n"
        "\n"
        "func (w *Wrapper) Table() flatbuffers.Table {\n"
        "\treturn w.inner._tab\n"
        "}\n"
        "\n"
        "type Item struct {\n"
        "\t_tab flatbuffers.Table\n"
        "}\n"
    )
    assert record_type_name(_tree(source)) == "Item"


def test_record_name_comes_from_declaration_not_filename():
    source = (
        "package flatdata\n"
        "\n"
        "import flatbuffers \"github.com/google/flatbuffers/go\"\n"
        "\n"
        "type Options struct {\n"
        "\tverbose bool\n"
        "}\n"
        "\n"
        "type CharacterExcel struct {\n"
        "\t_tab flatbuffers.Table\n"
        "}\n"
    )
    tree = parse_go_source(source.encode("utf-8"), "character_excel.go")

    assert record_type_name(tree) == "CharacterExcel"


def test_custom_sentinel_name():
    source = record_source("Item").replace("flatbuffers.Table", "flatbuffers.Struct")
    tree = _tree(source)

    assert is_record_file(tree, sentinel="Struct") is True
    assert is_record_file(tree) is False
