from __future__ import annotations

"""
Integration tests for the post-processing engine.

Runs the full directory pipeline (scan, parse, detect, patch, write and
registry emission) against a temporary compiler output directory.
"""

from pathlib import Path
from typing import Any, Dict

from fbsprocessor.core.pipeline.engine import build_processor, process_directory, run_pipeline
from fbsprocessor.core.pipeline.validator import validate_config
from go_samples import ENUM_GO, HELPER_GO, ITEM_ACCESSOR, ITEM_GO, VEC3_GO, record_source

REGISTRY = "flatdatas_helper.go"


def _config(directory: Path, **extra: Any) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {"input_dir": str(directory)}
    cfg.update(extra)
    return cfg


def _snapshot(directory: Path) -> Dict[str, bytes]:
    return {p.name: p.read_bytes() for p in sorted(directory.iterdir()) if p.is_file()}


# -----------------------------------------------------------------------------
# Happy path
# -----------------------------------------------------------------------------

def test_records_are_patched_and_registered(generated_dir: Path):
    result = run_pipeline(_config(generated_dir))

    assert result.ok, result.error
    assert result.record_types == ["Item", "Weapon"]
    assert [Path(p).name for p in result.patched_files] == ["Item.go", "Weapon.go"]
    assert [Path(p).name for p in result.skipped_files] == ["Helper.go", "Rarity.go"]
    assert result.unchanged_files == []
    assert result.summary == {
        "files_seen": 4, "patched": 2, "unchanged": 0, "skipped": 2, "record_types": 2,
    }

    assert (generated_dir / "Item.go").read_text(encoding="utf-8") == ITEM_GO + "\n" + ITEM_ACCESSOR
    registry = (generated_dir / REGISTRY).read_text(encoding="utf-8")
    assert result.registry_path == str(generated_dir / REGISTRY)
    assert registry.startswith("package flatdata\n")
    assert registry.index('"Item"') < registry.index('"Weapon"')
    assert "Helper" not in registry
    assert "Rarity" not in registry


def test_non_record_files_are_untouched(generated_dir: Path):
    run_pipeline(_config(generated_dir))

    assert (generated_dir / "Helper.go").read_text(encoding="utf-8") == HELPER_GO
    assert (generated_dir / "Rarity.go").read_text(encoding="utf-8") == ENUM_GO


def test_second_run_changes_nothing(generated_dir: Path):
    first = run_pipeline(_config(generated_dir))
    before = _snapshot(generated_dir)

    second = run_pipeline(_config(generated_dir))

    assert first.ok and second.ok
    assert second.patched_files == []
    assert [Path(p).name for p in second.unchanged_files] == ["Item.go", "Weapon.go"]
    assert [Path(p).name for p in second.skipped_files] == ["Helper.go", "Rarity.go"]
    assert second.record_types == first.record_types
    assert _snapshot(generated_dir) == before


def test_test_files_are_excluded_by_default(generated_dir: Path, write_go):
    write_go("Item_test.go", record_source("ItemFixture"))

    result = run_pipeline(_config(generated_dir))

    assert "ItemFixture" not in result.record_types
    assert (generated_dir / "Item_test.go").read_text(encoding="utf-8") == record_source("ItemFixture")


def test_empty_directory_emits_empty_registry(tmp_path: Path):
    result = run_pipeline(_config(tmp_path))

    assert result.ok
    assert result.record_types == []
    assert "map[string]reflect.Type{\n}" in (tmp_path / REGISTRY).read_text(encoding="utf-8")


# -----------------------------------------------------------------------------
# Options
# -----------------------------------------------------------------------------

def test_dry_run_writes_nothing(generated_dir: Path):
    before = _snapshot(generated_dir)

    result = run_pipeline(_config(generated_dir), dry_run=True)

    assert result.ok and result.dry_run
    assert [Path(p).name for p in result.patched_files] == ["Item.go", "Weapon.go"]
    assert _snapshot(generated_dir) == before
    assert not (generated_dir / REGISTRY).exists()


def test_package_is_inferred_from_record_files(tmp_path: Path, write_go):
    write_go("Item.go", record_source("Item").replace("package flatdata", "package gamedata"))

    run_pipeline(_config(tmp_path))

    assert (tmp_path / REGISTRY).read_text(encoding="utf-8").startswith("package gamedata\n")


def test_package_and_registry_name_overrides(generated_dir: Path):
    result = run_pipeline(_config(
        generated_dir, package_name="tables", registry_file_name="registry_gen.go",
    ))

    assert result.ok
    assert not (generated_dir / REGISTRY).exists()
    assert (generated_dir / "registry_gen.go").read_text(encoding="utf-8").startswith("package tables\n")


def test_custom_template_file(generated_dir: Path, tmp_path_factory):
    template = tmp_path_factory.mktemp("tmpl") / "registry.tmpl"
    template.write_text("package $package\n\n// $entries\n", encoding="utf-8")

    result = run_pipeline(_config(generated_dir, registry_template=str(template)))

    assert result.ok
    content = (generated_dir / REGISTRY).read_text(encoding="utf-8")
    assert content.startswith("package flatdata\n\n// \n\t\"Item\"")


def test_per_type_mode_patches_remaining_types(tmp_path: Path, write_go):
    source = record_source("Item") + (
        "\n"
        "type ItemT struct {\n"
        "\tId int64\n"
        "}\n"
        "\n"
        "func (*ItemT) Name() string {\n"
        "\treturn \"ItemT\"\n"
        "}\n"
    )
    path = write_go("Item.go", source)

    default_run = run_pipeline(_config(tmp_path))
    assert [Path(p).name for p in default_run.unchanged_files] == ["Item.go"]
    assert path.read_text(encoding="utf-8") == source

    per_type_run = run_pipeline(_config(tmp_path, per_type_idempotence=True))
    assert [Path(p).name for p in per_type_run.patched_files] == ["Item.go"]
    assert path.read_text(encoding="utf-8") == (
        source + '\nfunc (*Item) Name() string {\n\treturn "Item"\n}\n'
    )


def test_process_directory_with_explicit_processor(generated_dir: Path):
    cfg, _ = validate_config(_config(generated_dir))
    processor = build_processor(cfg)

    result = process_directory(processor, str(generated_dir), [], language="go", dry_run=True)

    assert result.language == "go"
    assert result.record_types == ["Item", "Weapon"]


# -----------------------------------------------------------------------------
# Failures
# -----------------------------------------------------------------------------

def test_parse_error_stops_the_run(generated_dir: Path, write_go):
    write_go("Broken.go", "package flatdata\n\nfunc broken( {\n")

    result = run_pipeline(_config(generated_dir))

    assert not result.ok
    assert result.summary["phase"] == "parse"
    assert result.summary["path"].endswith("Broken.go")
    assert "Broken.go" in result.error
    # Broken.go sorts before Item.go, so nothing was written
    assert (generated_dir / "Item.go").read_text(encoding="utf-8") == ITEM_GO
    assert not (generated_dir / REGISTRY).exists()


def test_duplicate_record_names_fail(tmp_path: Path, write_go):
    write_go("Item.go", record_source("Item"))
    write_go("ItemCopy.go", record_source("Item"))

    result = run_pipeline(_config(tmp_path))

    assert not result.ok
    assert result.summary["phase"] == "collect"
    assert "Item" in result.error
    assert not (tmp_path / REGISTRY).exists()


def test_unsupported_language(generated_dir: Path):
    result = run_pipeline(_config(generated_dir, language="rust"))

    assert not result.ok
    assert result.summary["phase"] == "config"
    assert "rust" in result.error


def test_invalid_input_directory(tmp_path: Path):
    result = run_pipeline(_config(tmp_path / "missing"))

    assert not result.ok
    assert result.summary["phase"] == "input"
    assert "Invalid input directory" in result.error


def test_struct_type_files_are_patched_and_registered(generated_dir: Path, write_go):
    path = write_go("Vec3.go", VEC3_GO)

    result = run_pipeline(_config(generated_dir))

    assert result.ok, result.error
    assert result.record_types == ["Item", "Vec3", "Weapon"]
    assert path.read_text(encoding="utf-8") == (
        VEC3_GO + '\nfunc (*Vec3) Name() string {\n\treturn "Vec3"\n}\n'
    )
    assert '"Vec3": reflect.TypeOf((*Vec3)(nil)).Elem(),' in (
        (generated_dir / REGISTRY).read_text(encoding="utf-8")
    )
