"""Build-time constant substitution applied before any rewriter."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field


def _substitution_pattern(tokens: tuple[str, ...]) -> re.Pattern[str] | None:
    if not tokens:
        return None
    ordered = sorted(tokens, key=len, reverse=True)
    alternation = "|".join(re.escape(token) for token in ordered)
    return re.compile(rf"\b(?:{alternation})\b(?!\.)")


@dataclass(slots=True, frozen=True)
class EnvSubstitution:
    """Replaces whole-word tokens such as process.env.VERSION with literal text."""

    values: Mapping[str, str] = field(default_factory=dict)

    def apply(self, text: str) -> str:
        """Return text with every recognized token substituted."""
        pattern = _substitution_pattern(tuple(self.values.keys()))
        if pattern is None:
            return text
        return pattern.sub(lambda match: self.values[match.group(0)], text)
