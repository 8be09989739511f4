"""Ordered specifier alias table applied before module resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class AliasEntry:
    """Single alias: exact specifier or compiled pattern, plus replacement."""

    find: str | re.Pattern[str]
    replacement: str

    def matches(self, specifier: str) -> bool:
        """Return True when this entry applies to the specifier."""
        if isinstance(self.find, re.Pattern):
            return self.find.search(specifier) is not None
        return specifier == self.find or specifier.startswith(f"{self.find}/")

    def apply(self, specifier: str) -> str:
        """Return the substituted specifier; caller checks matches() first."""
        if isinstance(self.find, re.Pattern):
            replacement = self.replacement
            return self.find.sub(lambda _match: replacement, specifier, count=1)
        return f"{self.replacement}{specifier[len(self.find):]}"


@dataclass(slots=True, frozen=True)
class AliasTable:
    """Ordered alias entries; first match wins, unmatched passes through."""

    entries: tuple[AliasEntry, ...] = ()

    def match(self, specifier: str) -> AliasEntry | None:
        """Return the first entry that applies to the specifier."""
        for entry in self.entries:
            if entry.matches(specifier):
                return entry
        return None

    def resolve(self, specifier: str) -> str:
        """Return the aliased specifier, or the original when nothing matches."""
        entry = self.match(specifier)
        if entry is None:
            return specifier
        return entry.apply(specifier)

    def extended(self, *entries: AliasEntry) -> AliasTable:
        """Return a new table with entries appended after the current ones."""
        return AliasTable(entries=self.entries + tuple(entries))
