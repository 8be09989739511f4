"""Interpreter directive handling for executable entry modules."""

from __future__ import annotations

from dataclasses import dataclass, field


def split_shebang(text: str) -> tuple[str | None, str]:
    """Split a leading '#!' line (with its newline) from the rest of text."""
    if not text.startswith("#!"):
        return None, text
    newline = text.find("\n")
    if newline == -1:
        return text, ""
    return text[: newline + 1], text[newline + 1 :]


@dataclass(slots=True)
class ShebangStore:
    """Directives removed from modules during one build, keyed by module id."""

    _by_module: dict[str, str] = field(default_factory=dict)

    def capture(self, module_id: str, text: str) -> str:
        """Remove and remember a module's directive; returns the remaining text."""
        directive, rest = split_shebang(text)
        if directive is None:
            return text
        self._by_module[module_id] = directive
        return rest

    def get(self, module_id: str | None) -> str | None:
        if module_id is None:
            return None
        return self._by_module.get(module_id)
