from __future__ import annotations

from pathlib import Path

import pytest

from bundle_stages.aliases import STANDINS_DIR, default_alias_table, standin_path


def test_default_table_redirects_native_and_heavy_dependencies() -> None:
    table = default_alias_table()

    assert table.resolve("postcss") == "postcss-es6"
    assert table.resolve("postcss/") == "postcss-es6/"
    assert table.resolve("bufferutil") == "bufferutil/fallback.js"
    assert table.resolve("utf-8-validate") == "utf-8-validate/fallback.js"
    assert table.resolve("istextorbinary") == "istextorbinary/edition-node-0.12/index.js"


def test_default_table_points_stand_ins_at_shipped_modules() -> None:
    table = default_alias_table()

    assert table.resolve("@babel/plugin-syntax-jsx") == standin_path("empty.js")
    assert table.resolve("readable-stream") == standin_path("readable-stream.js")
    assert table.resolve("readable-stream/duplex") == standin_path("readable-stream-duplex.js")
    assert table.resolve("inherits") == standin_path("inherits.js")
    assert table.resolve("fsevents") == standin_path("fsevents.js")


def test_default_table_leaves_other_specifiers_alone() -> None:
    table = default_alias_table()

    assert table.resolve("postcss/lib/parser") == "postcss/lib/parser"
    assert table.resolve("postcss-nested") == "postcss-nested"
    assert table.resolve("./local.js") == "./local.js"


def test_stand_in_modules_exist_on_disk() -> None:
    for name in (
        "empty.js",
        "readable-stream.js",
        "readable-stream-duplex.js",
        "inherits.js",
        "fsevents.js",
    ):
        path = Path(standin_path(name))
        assert path.is_file()
        assert path.parent == STANDINS_DIR


def test_unknown_stand_in_raises() -> None:
    with pytest.raises(FileNotFoundError, match="not-there.js"):
        standin_path("not-there.js")


def test_acorn_import_assertions_is_pinned_to_root_install(tmp_path: Path) -> None:
    installed = tmp_path / "node_modules" / "acorn-import-assertions"
    installed.mkdir(parents=True)

    pinned = default_alias_table(tmp_path)

    assert pinned.resolve("acorn-import-assertions") == str(installed)
    assert pinned.resolve("acorn-import-assertions/lib") == "acorn-import-assertions/lib"


def test_acorn_import_assertions_passes_through_without_install(tmp_path: Path) -> None:
    assert default_alias_table().resolve("acorn-import-assertions") == "acorn-import-assertions"
    assert (
        default_alias_table(tmp_path).resolve("acorn-import-assertions")
        == "acorn-import-assertions"
    )
