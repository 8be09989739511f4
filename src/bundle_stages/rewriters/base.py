"""Core rewriter protocol and shared call-site helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from bundle_stages.diagnostics import BuildDiagnostics


@dataclass(slots=True, frozen=True)
class RewriteContext:
    """Build-scoped collaborators handed to every rewrite call."""

    diagnostics: BuildDiagnostics


class Rewriter(Protocol):
    """Protocol implemented by pattern-gated rewriters."""

    name: str

    def matches(self, module_id: str, text: str) -> bool:
        """Return True when the module carries this rewriter's signature."""

    def rewrite(self, module_id: str, text: str, context: RewriteContext) -> str | None:
        """Return rewritten text, or None to leave the module untouched."""


def js_string(text: str) -> str:
    """Return a double-quoted JavaScript string literal for text."""
    return json.dumps(text, ensure_ascii=False)


def resolved_promise(text: str) -> str:
    """Expression for an already-fulfilled promise holding text."""
    return f"Promise.resolve({js_string(text)})"


def rejected_promise(message: str) -> str:
    """Expression for an already-rejected promise with an Error(message)."""
    return f"Promise.reject(Error({js_string(message)}))"


def read_error_message(error: OSError | UnicodeDecodeError) -> str:
    """Return the message carried by a failed build-time read."""
    return str(error)


def inline_file_promise(
    path: Path,
    *,
    label: str,
    module_id: str,
    stage: str,
    context: RewriteContext,
) -> str:
    """Read path now and return a settled promise expression for the call site.

    A failed read is reported as a warning and deferred into the artifact as a
    rejected promise carrying the read error's message.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        message = read_error_message(exc)
        context.diagnostics.warn(
            stage,
            f"Failed to inline {label} into {module_id}:\n{message}",
            module_id=module_id,
        )
        return rejected_promise(message)
    return resolved_promise(text)
