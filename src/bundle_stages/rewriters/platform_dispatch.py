"""Turn a runtime-computed platform require() into a static lookup table."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from bundle_stages.paths import module_directory, normalize_module_id
from bundle_stages.rewriters.base import RewriteContext

DEVCERT_PLATFORMS_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"devcert[/\\]dist[/\\]platforms[/\\]index\.js$"
)
DEVCERT_DISPATCH_EXPRESSION: Final[str] = "require(`./${process.platform}`)"


def platform_variants(directory: Path, *, extension: str, exclude: str) -> list[tuple[str, str]]:
    """List (name, filename) pairs for sibling implementations in directory.

    Files without the extension and the aggregator itself are skipped. A
    missing directory yields no variants.
    """
    if not directory.is_dir():
        return []
    variants: list[tuple[str, str]] = []
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        if not entry.is_file():
            continue
        filename = entry.name
        if not filename.endswith(extension):
            continue
        name = filename[: -len(extension)]
        if not name or name == exclude:
            continue
        variants.append((name, filename))
    return variants


def static_dispatch_table(variants: list[tuple[str, str]], discriminant: str) -> str:
    """Render `({"name": require("./file"),...})[discriminant]`."""
    members = ",".join(
        f"{json.dumps(name)}: require({json.dumps('./' + filename)})"
        for name, filename in variants
    )
    return f"({{{members}}})[{discriminant}]"


@dataclass(slots=True, frozen=True)
class PlatformDispatchRewriter:
    """Replaces a dynamic per-platform require with an indexed static table."""

    name: str = "fix-devcert"
    id_pattern: re.Pattern[str] = DEVCERT_PLATFORMS_PATTERN
    dispatch_expression: str = DEVCERT_DISPATCH_EXPRESSION
    discriminant: str = "process.platform"
    extension: str = ".js"
    platforms_dir: Path | None = None

    def matches(self, module_id: str, text: str) -> bool:
        """Gate on the aggregator's module id."""
        _ = text
        return self.id_pattern.search(normalize_module_id(module_id)) is not None

    def rewrite(self, module_id: str, text: str, context: RewriteContext) -> str | None:
        """Enumerate variants now (never cached) and swap in the static table."""
        _ = context
        if not self.matches(module_id, text):
            return None
        if self.dispatch_expression not in text:
            return None
        directory = self.platforms_dir or module_directory(module_id)
        aggregator = Path(normalize_module_id(module_id)).name
        exclude = aggregator
        if aggregator.endswith(self.extension):
            exclude = aggregator[: -len(self.extension)]
        variants = platform_variants(directory, extension=self.extension, exclude=exclude)
        table = static_dispatch_table(variants, self.discriminant)
        return text.replace(self.dispatch_expression, table, 1)
