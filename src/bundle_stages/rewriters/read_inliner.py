"""Inline relative fs.readFile() calls in modules that opt in via marker comment."""

from __future__ import annotations

import re
from typing import Final

from bundle_stages.paths import resolve_beside_module
from bundle_stages.rewriters.base import RewriteContext, inline_file_promise

MARKER_PATTERN: Final[re.Pattern[str]] = re.compile(r"//\s*rollup-inline-files")
READ_CALL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"fs(?:\.promises)?\.readFile\(\s*new\s+URL\s*\(\s*(['\"`])(.+?)\1\s*,"
    r"\s*(?:__filename|import\.meta\.url)\s*\)\s*,\s*(['\"])utf-?8\3\s*\)"
)


class DeferredReadInliner:
    """Replaces `fs.readFile(new URL(rel, __filename), 'utf-8')` with a settled promise."""

    name = "inline-fs-readfile"

    def matches(self, module_id: str, text: str) -> bool:
        """Gate on the opt-in marker comment."""
        _ = module_id
        return MARKER_PATTERN.search(text) is not None

    def rewrite(self, module_id: str, text: str, context: RewriteContext) -> str | None:
        """Inline every matching call site independently, in source order."""
        if not self.matches(module_id, text):
            return None

        def _inline(match: re.Match[str]) -> str:
            filename = match.group(2)
            return inline_file_promise(
                resolve_beside_module(module_id, filename),
                label=filename,
                module_id=module_id,
                stage=self.name,
                context=context,
            )

        return READ_CALL_PATTERN.sub(_inline, text)
