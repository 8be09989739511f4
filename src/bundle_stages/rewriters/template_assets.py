"""Inline template assets that a third-party module reads beside itself."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from bundle_stages.paths import normalize_module_id, resolve_beside_module
from bundle_stages.rewriters.base import RewriteContext, inline_file_promise

VISUALIZER_STATS_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"rollup-plugin-visualizer[/\\]dist[/\\]plugin[/\\]build-stats\.js$"
)
DIRNAME_READ_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\bfs\b[^\n]*?readFile[^\n]*?\(__dirname,\s*(.+?)\)\s*,\s*[\"']utf-?8[\"']\s*\)"
)
QUOTES_PATTERN: Final[re.Pattern[str]] = re.compile(r"['\"`]+")
ARGUMENT_SPLIT_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s*,\s*")


def template_path_parts(arguments: str, template: str) -> list[str]:
    """Turn `"..", `${template}.js`` source text into concrete path parts."""
    unquoted = QUOTES_PATTERN.sub("", arguments).replace("${template}", template)
    return [part for part in ARGUMENT_SPLIT_PATTERN.split(unquoted.strip()) if part]


@dataclass(slots=True, frozen=True)
class TemplateAssetInliner:
    """Inlines `readFile(path.join(__dirname, ...), "utf8")` for a known template."""

    name: str = "fix-visualizer"
    id_pattern: re.Pattern[str] = VISUALIZER_STATS_PATTERN
    template: str = "treemap"

    def matches(self, module_id: str, text: str) -> bool:
        """Gate on the third-party module id."""
        _ = text
        return self.id_pattern.search(normalize_module_id(module_id)) is not None

    def rewrite(self, module_id: str, text: str, context: RewriteContext) -> str | None:
        if not self.matches(module_id, text):
            return None

        def _inline(match: re.Match[str]) -> str:
            parts = template_path_parts(match.group(1), self.template)
            path = resolve_beside_module(module_id, *parts)
            return inline_file_promise(
                path,
                label=str(path),
                module_id=module_id,
                stage=self.name,
                context=context,
            )

        return DIRNAME_READ_PATTERN.sub(_inline, text)
