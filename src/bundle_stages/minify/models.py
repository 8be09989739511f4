"""Typed models shared by the minification stage and its engines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, frozen=True)
class MinifyOptions:
    """Fixed minifier configuration passed to every engine call."""

    compress: bool = False
    ecma: int = 2018
    mangle: bool = True
    module: bool = True
    comments: bool = False
    safari10: bool = True
    sourcemap: bool = False


@dataclass(slots=True, frozen=True)
class MinifyOutput:
    """Raw engine result; code may be empty and map may be serialized."""

    code: str | None
    map: str | dict[str, object] | None = None


@dataclass(slots=True, frozen=True)
class RenderedChunk:
    """Final code and normalized source map for one output chunk."""

    code: str
    map: dict[str, object] | None = None


class Minifier(Protocol):
    """Protocol implemented by external minifier engines."""

    name: str

    def minify(self, code: str, options: MinifyOptions) -> MinifyOutput:
        """Return minified code; raise on failure."""

    def unsupported_options(self, options: MinifyOptions) -> tuple[str, ...]:
        """Return names of requested options this engine cannot honor."""
