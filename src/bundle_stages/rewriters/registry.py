"""Rewriter registry with deterministic first-applicable-wins behavior."""

from __future__ import annotations

from dataclasses import dataclass, field

from bundle_stages.rewriters.base import RewriteContext, Rewriter


@dataclass(slots=True, frozen=True)
class RewriteOutcome:
    """Text produced by the rewriter that claimed a module."""

    rewriter: str
    text: str


@dataclass(slots=True)
class RewriterRegistry:
    """Ordered rewriter registry preserving registration order."""

    _rewriters: list[Rewriter] = field(default_factory=list)

    def register(self, rewriter: Rewriter) -> None:
        """Register a rewriter in deterministic insertion order."""
        if rewriter.name in self.names():
            raise ValueError(f"Rewriter already registered: {rewriter.name}")
        self._rewriters.append(rewriter)

    def names(self) -> tuple[str, ...]:
        """Return registered rewriter names in application order."""
        return tuple(rewriter.name for rewriter in self._rewriters)

    def candidates(self, module_id: str, text: str) -> tuple[Rewriter, ...]:
        """Return rewriters whose gate accepts the module, in order."""
        return tuple(rewriter for rewriter in self._rewriters if rewriter.matches(module_id, text))

    def apply(self, module_id: str, text: str, context: RewriteContext) -> RewriteOutcome | None:
        """Offer the module to each rewriter; the first one that changes it wins."""
        for rewriter in self._rewriters:
            if not rewriter.matches(module_id, text):
                continue
            rewritten = rewriter.rewrite(module_id, text, context)
            if rewritten is None or rewritten == text:
                continue
            return RewriteOutcome(rewriter=rewriter.name, text=rewritten)
        return None
