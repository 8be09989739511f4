"""Default alias table for the single-file CLI distribution."""

from __future__ import annotations

import re
from pathlib import Path

from bundle_stages.aliases.table import AliasEntry, AliasTable

STANDINS_DIR = Path(__file__).resolve().parent.parent / "standins"

EMPTY_MODULE = "empty.js"
READABLE_STREAM_MODULE = "readable-stream.js"
READABLE_STREAM_DUPLEX_MODULE = "readable-stream-duplex.js"
INHERITS_MODULE = "inherits.js"
FSEVENTS_MODULE = "fsevents.js"


def standin_path(name: str) -> str:
    """Return the absolute path of a shipped stand-in module."""
    path = STANDINS_DIR / name
    if not path.is_file():
        raise FileNotFoundError(f"Unknown stand-in module: {name}")
    return str(path)


def installed_package_path(root: Path | None, name: str) -> str:
    """Return root/node_modules/<name> when installed there, else the bare name."""
    if root is None:
        return name
    path = root / "node_modules" / name
    if not path.is_dir():
        return name
    return str(path)


def default_alias_table(root: Path | None = None) -> AliasTable:
    """Build the alias table that strips native, legacy and heavy dependencies.

    With a project root, acorn-import-assertions is pinned to the copy
    installed under that root so nested copies collapse into one.
    """
    return AliasTable(
        entries=(
            AliasEntry(re.compile(r"^@babel/plugin-syntax-jsx$"), standin_path(EMPTY_MODULE)),
            AliasEntry(re.compile(r"^postcss$"), "postcss-es6"),
            AliasEntry(re.compile(r"^postcss[/\\]$"), "postcss-es6/"),
            # native addons aimed at websocket throughput
            AliasEntry(re.compile(r"^bufferutil$"), "bufferutil/fallback.js"),
            AliasEntry(re.compile(r"^utf-8-validate$"), "utf-8-validate/fallback.js"),
            # node streams
            AliasEntry(
                re.compile(r"(^|[/\\])readable-stream$"),
                standin_path(READABLE_STREAM_MODULE),
            ),
            AliasEntry(
                re.compile(r"(^|[/\\])readable-stream[/\\]duplex"),
                standin_path(READABLE_STREAM_DUPLEX_MODULE),
            ),
            AliasEntry(re.compile(r"^inherits$"), standin_path(INHERITS_MODULE)),
            # loaded on first property access only
            AliasEntry(re.compile(r"^fsevents$"), standin_path(FSEVENTS_MODULE)),
            # skips the "editions" resolver and its dependency tree
            AliasEntry(
                re.compile(r"^istextorbinary$"),
                "istextorbinary/edition-node-0.12/index.js",
            ),
            AliasEntry(
                re.compile(r"^acorn-import-assertions$"),
                installed_package_path(root, "acorn-import-assertions"),
            ),
        )
    )
