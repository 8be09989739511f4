"""Final-chunk minification with fallback and timing diagnostics."""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from bundle_stages.diagnostics import BuildDiagnostics
from bundle_stages.minify.models import Minifier, MinifyOptions, MinifyOutput, RenderedChunk

STAGE_NAME = "minify"

DebugGate = Callable[[], bool]


def normalize_source_map(raw: str | dict[str, object] | None) -> dict[str, object] | None:
    """Accept a serialized or structured map; anything else becomes None."""
    if isinstance(raw, str):
        if not raw:
            return None
        parsed = json.loads(raw)
        if not isinstance(parsed, dict):
            raise ValueError("Source map must decode to a JSON object.")
        return parsed
    if isinstance(raw, dict):
        return raw
    return None


@dataclass(slots=True)
class MinifyStage:
    """Runs one chunk through the external minifier."""

    minifier: Minifier
    options: MinifyOptions = field(default_factory=MinifyOptions)
    warn_threshold_ms: float = 50
    debug: DebugGate = lambda: False
    clock: Callable[[], float] = time.perf_counter
    _options_checked: bool = field(default=False, init=False, repr=False)

    def render(self, code: str, file_name: str, diagnostics: BuildDiagnostics) -> RenderedChunk:
        """Minify code; a minifier exception is fatal for this chunk."""
        self._check_options(file_name, diagnostics)
        try:
            started = self.clock()
            output: MinifyOutput = self.minifier.minify(code, self.options)
            duration_ms = (self.clock() - started) * 1000
        except Exception as exc:
            raise diagnostics.error(
                STAGE_NAME,
                f"minify({file_name}) failed: {exc}",
                module_id=file_name,
            ) from exc

        minified = output.code if output.code else code

        if duration_ms > self.warn_threshold_ms and self.debug():
            diagnostics.warn(
                STAGE_NAME,
                f"minify({file_name}) took {duration_ms:.0f}ms",
                module_id=file_name,
            )

        try:
            source_map = normalize_source_map(output.map)
        except ValueError as exc:
            raise diagnostics.error(
                STAGE_NAME,
                f"minify({file_name}) returned an invalid source map: {exc}",
                module_id=file_name,
            ) from exc
        return RenderedChunk(code=minified, map=source_map)

    def _check_options(self, file_name: str, diagnostics: BuildDiagnostics) -> None:
        # reported once per build
        if self._options_checked:
            return
        self._options_checked = True
        ignored = self.minifier.unsupported_options(self.options)
        if not ignored:
            return
        diagnostics.warn(
            STAGE_NAME,
            f"minify engine {self.minifier.name} ignores requested options: {', '.join(ignored)}",
            module_id=file_name,
        )
