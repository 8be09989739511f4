"""Typed models exchanged with the host bundler."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class SourceModule:
    """One loaded module: its id, the text as loaded and the current text."""

    module_id: str
    raw_text: str
    text: str

    @classmethod
    def load(cls, module_id: str, text: str) -> SourceModule:
        """Create a module whose current text equals its raw text."""
        return cls(module_id=module_id, raw_text=text, text=text)

    def with_text(self, text: str) -> SourceModule:
        """Return a copy carrying rewritten text."""
        return SourceModule(module_id=self.module_id, raw_text=self.raw_text, text=text)

    @property
    def changed(self) -> bool:
        return self.text != self.raw_text


@dataclass(slots=True, frozen=True)
class Chunk:
    """Assembled output chunk as handed over by the host."""

    file_name: str
    code: str
    facade_module_id: str | None = None
    is_entry: bool = False


@dataclass(slots=True, frozen=True)
class TransformResult:
    """Per-module hook result; map stays None for textual rewrites."""

    code: str
    map: dict[str, object] | None = None
    rewriter: str | None = None
