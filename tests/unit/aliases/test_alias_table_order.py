from __future__ import annotations

import re

from bundle_stages.aliases import AliasEntry, AliasTable


def test_earlier_entry_wins_for_overlapping_patterns() -> None:
    table = AliasTable(
        entries=(
            AliasEntry(re.compile(r"^lodash"), "lodash-es"),
            AliasEntry(re.compile(r"^lodash$"), "lodash-lite"),
        )
    )

    assert table.resolve("lodash") == "lodash-es"
    assert table.match("lodash") is table.entries[0]


def test_reversed_table_changes_winner() -> None:
    table = AliasTable(
        entries=(
            AliasEntry(re.compile(r"^lodash$"), "lodash-lite"),
            AliasEntry(re.compile(r"^lodash"), "lodash-es"),
        )
    )

    assert table.resolve("lodash") == "lodash-lite"


def test_unmatched_specifier_passes_through_unchanged() -> None:
    table = AliasTable(entries=(AliasEntry("left-pad", "pad-left"),))

    assert table.resolve("right-pad") == "right-pad"
    assert table.match("right-pad") is None
    assert AliasTable().resolve("anything") == "anything"


def test_exact_entry_matches_specifier_and_subpaths_only() -> None:
    table = AliasTable(entries=(AliasEntry("postcss", "postcss-es6"),))

    assert table.resolve("postcss") == "postcss-es6"
    assert table.resolve("postcss/lib/parser") == "postcss-es6/lib/parser"
    assert table.resolve("postcss-loader") == "postcss-loader"


def test_pattern_entry_replaces_matched_portion_only() -> None:
    table = AliasTable(entries=(AliasEntry(re.compile(r"^istextorbinary"), "itob"),))

    assert table.resolve("istextorbinary/edition") == "itob/edition"


def test_pattern_replacement_backslashes_are_literal() -> None:
    windows_path = r"C:\stand\ins\new.js"
    table = AliasTable(entries=(AliasEntry(re.compile(r"^inherits$"), windows_path),))

    assert table.resolve("inherits") == windows_path


def test_extended_table_appends_after_existing_entries() -> None:
    base = AliasTable(entries=(AliasEntry("a", "first"),))
    extended = base.extended(AliasEntry("a", "second"), AliasEntry("b", "third"))

    assert extended.resolve("a") == "first"
    assert extended.resolve("b") == "third"
    assert base.resolve("b") == "b"
