"""Module id and build-time path helpers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")


def normalize_module_id(module_id: str) -> str:
    """Normalize path separators so id signatures match on every platform."""
    return module_id.replace("\\", "/")


def is_relative_specifier(specifier: str) -> bool:
    """Return True for './x', '../x' and absolute specifiers."""
    if not specifier:
        return False
    if specifier[0] in (".", "/"):
        return True
    return WINDOWS_ABSOLUTE_PATTERN.match(specifier) is not None


def module_directory(module_id: str) -> Path:
    """Return the directory that holds a module."""
    return Path(normalize_module_id(module_id)).parent


def resolve_beside_module(module_id: str, *parts: str) -> Path:
    """Resolve a path relative to a module's directory at build time."""
    return module_directory(module_id).joinpath(*parts).resolve(strict=False)
