"""Per-build report of npm packages pulled into the bundle."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

from bundle_stages.aliases.externals import is_builtin
from bundle_stages.diagnostics import BuildDiagnostics
from bundle_stages.paths import is_relative_specifier

PACKAGE_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(@[^/]+/)?[^/]+")


def package_name(specifier: str) -> str | None:
    """Return the npm package name of a bare specifier, else None."""
    if is_relative_specifier(specifier) or is_builtin(specifier):
        return None
    match = PACKAGE_NAME_PATTERN.match(specifier)
    if match is None:
        return None
    return match.group(0)


@dataclass(slots=True)
class DependencyLog:
    """Records the first importer of every bare package seen during one build."""

    diagnostics: BuildDiagnostics
    _first_importer: dict[str, str | None] = field(default_factory=dict)

    def observe(self, specifier: str, importer: str | None) -> str | None:
        """Record a resolution; returns the package name when newly seen."""
        name = package_name(specifier)
        if name is None or name in self._first_importer:
            return None
        self._first_importer[name] = importer
        self.diagnostics.info(
            "dependencies",
            f"{name} imported by {importer or '<entry>'}",
            module_id=importer,
            metadata={"package": name},
        )
        return name

    def packages(self) -> tuple[str, ...]:
        """Return discovered package names in discovery order."""
        return tuple(self._first_importer.keys())
