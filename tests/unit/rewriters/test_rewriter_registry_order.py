from __future__ import annotations

from dataclasses import dataclass

import pytest

from bundle_stages.config import RewriteConfig
from bundle_stages.diagnostics import BuildDiagnostics
from bundle_stages.rewriters import RewriteContext, RewriterRegistry, build_rewriter_registry


@dataclass(slots=True)
class SuffixRewriter:
    name: str
    suffix: str
    output: str | None
    calls: int = 0

    def matches(self, module_id: str, text: str) -> bool:
        _ = text
        return module_id.endswith(self.suffix)

    def rewrite(self, module_id: str, text: str, context: RewriteContext) -> str | None:
        _ = module_id
        _ = context
        self.calls += 1
        if self.output is None:
            return None
        return f"{text}{self.output}"


def _context() -> RewriteContext:
    return RewriteContext(diagnostics=BuildDiagnostics())


def test_first_rewriter_that_changes_text_wins() -> None:
    registry = RewriterRegistry()
    first = SuffixRewriter(name="first", suffix=".js", output="/*first*/")
    second = SuffixRewriter(name="second", suffix=".js", output="/*second*/")
    registry.register(first)
    registry.register(second)

    outcome = registry.apply("/a/b.js", "x", _context())

    assert outcome is not None
    assert outcome.rewriter == "first"
    assert outcome.text == "x/*first*/"
    assert second.calls == 0


def test_rewriter_returning_none_passes_module_on() -> None:
    registry = RewriterRegistry()
    registry.register(SuffixRewriter(name="noop", suffix=".js", output=None))
    registry.register(SuffixRewriter(name="real", suffix=".js", output="!"))

    outcome = registry.apply("/a/b.js", "x", _context())

    assert outcome is not None
    assert outcome.rewriter == "real"


def test_rewriter_returning_same_text_counts_as_unchanged() -> None:
    registry = RewriterRegistry()
    registry.register(SuffixRewriter(name="identity", suffix=".js", output=""))

    assert registry.apply("/a/b.js", "x", _context()) is None


def test_non_matching_rewriters_are_not_invoked() -> None:
    registry = RewriterRegistry()
    css = SuffixRewriter(name="css", suffix=".css", output="!")
    registry.register(css)

    assert registry.apply("/a/b.js", "x", _context()) is None
    assert registry.candidates("/a/b.js", "x") == ()
    assert css.calls == 0


def test_duplicate_names_are_rejected() -> None:
    registry = RewriterRegistry()
    registry.register(SuffixRewriter(name="dup", suffix=".js", output=None))

    with pytest.raises(ValueError, match="dup"):
        registry.register(SuffixRewriter(name="dup", suffix=".mjs", output=None))


def test_runtime_registry_order_is_fixed() -> None:
    registry = build_rewriter_registry(RewriteConfig())

    assert registry.names() == (
        "inline-fs-readfile",
        "fix-devcert",
        "fix-visualizer",
        "disable-jsx-syntax",
    )
