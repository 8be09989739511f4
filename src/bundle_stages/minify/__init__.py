"""Minification stage and engines."""

from .engines import (
    MinifierCommandError,
    RJSMinMinifier,
    TerserCommandMinifier,
    build_minifier,
    options_from_config,
    terser_arguments,
)
from .models import Minifier, MinifyOptions, MinifyOutput, RenderedChunk
from .stage import MinifyStage, normalize_source_map

__all__ = [
    "Minifier",
    "MinifierCommandError",
    "MinifyOptions",
    "MinifyOutput",
    "MinifyStage",
    "RJSMinMinifier",
    "RenderedChunk",
    "TerserCommandMinifier",
    "build_minifier",
    "normalize_source_map",
    "options_from_config",
    "terser_arguments",
]
