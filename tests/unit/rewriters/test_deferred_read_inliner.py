from __future__ import annotations

import json
import re
from pathlib import Path

from bundle_stages.diagnostics import BuildDiagnostics
from bundle_stages.rewriters import DeferredReadInliner, RewriteContext

MARKER = "// rollup-inline-files\n"


def _context() -> RewriteContext:
    return RewriteContext(diagnostics=BuildDiagnostics())


def _read_error_message(path: Path) -> str:
    try:
        path.read_text(encoding="utf-8")
    except OSError as exc:
        return str(exc)
    raise AssertionError(f"{path} unexpectedly exists")


def test_module_without_marker_is_left_untouched(tmp_path: Path) -> None:
    (tmp_path / "data.txt").write_text("hello", encoding="utf-8")
    module_id = str(tmp_path / "mod.js")
    text = "const t = fs.readFile(new URL('./data.txt', __filename), 'utf-8');\n"
    inliner = DeferredReadInliner()
    context = _context()

    assert not inliner.matches(module_id, text)
    assert inliner.rewrite(module_id, text, context) is None
    assert context.diagnostics.all() == ()


def test_marker_with_resolvable_file_becomes_resolved_promise(tmp_path: Path) -> None:
    (tmp_path / "data.txt").write_text("hello", encoding="utf-8")
    module_id = str(tmp_path / "mod.js")
    text = MARKER + "const t = fs.readFile(new URL('./data.txt', __filename), 'utf-8');\n"

    rewritten = DeferredReadInliner().rewrite(module_id, text, _context())

    assert rewritten == MARKER + 'const t = Promise.resolve("hello");\n'


def test_inlined_literal_round_trips_file_contents(tmp_path: Path) -> None:
    content = 'line "one"\n\tline two \u2713 \\ end\n'
    (tmp_path / "tpl.html").write_text(content, encoding="utf-8")
    module_id = str(tmp_path / "mod.js")
    text = MARKER + "x = fs.promises.readFile(new URL(`./tpl.html`, import.meta.url), \"utf8\");"

    rewritten = DeferredReadInliner().rewrite(module_id, text, _context())

    assert rewritten is not None
    match = re.search(r"Promise\.resolve\((.*)\);", rewritten)
    assert match is not None
    assert json.loads(match.group(1)) == content


def test_missing_file_becomes_rejected_promise_and_one_warning(tmp_path: Path) -> None:
    module_id = str(tmp_path / "mod.js")
    text = MARKER + "const t = fs.readFile(new URL('./missing.txt', __filename), 'utf-8');\n"
    context = _context()
    expected_message = _read_error_message((tmp_path / "missing.txt").resolve())

    rewritten = DeferredReadInliner().rewrite(module_id, text, context)

    rejection = f"Promise.reject(Error({json.dumps(expected_message)}))"
    assert rewritten == MARKER + f"const t = {rejection};\n"
    warnings = context.diagnostics.warnings
    assert len(warnings) == 1
    assert "missing.txt" in warnings[0].message
    assert expected_message in warnings[0].message
    assert warnings[0].stage == "inline-fs-readfile"
    assert context.diagnostics.errors == ()


def test_multiple_call_sites_are_inlined_independently(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("A", encoding="utf-8")
    module_id = str(tmp_path / "mod.js")
    text = (
        MARKER
        + "const a = fs.readFile(new URL('./a.txt', __filename), 'utf-8');\n"
        + "const b = fs.readFile(new URL('./b.txt', __filename), 'utf-8');\n"
        + "const c = fs.readFile(new URL('./a.txt', __filename), 'utf-8');\n"
    )
    context = _context()

    rewritten = DeferredReadInliner().rewrite(module_id, text, context)

    assert rewritten is not None
    lines = rewritten.splitlines()
    assert lines[1] == 'const a = Promise.resolve("A");'
    assert lines[2].startswith("const b = Promise.reject(Error(")
    assert lines[3] == 'const c = Promise.resolve("A");'
    assert len(context.diagnostics.warnings) == 1
    assert "b.txt" in context.diagnostics.warnings[0].message


def test_marker_allows_flexible_whitespace(tmp_path: Path) -> None:
    inliner = DeferredReadInliner()

    assert inliner.matches(str(tmp_path / "m.js"), "//rollup-inline-files")
    assert inliner.matches(str(tmp_path / "m.js"), "//    rollup-inline-files")
    assert not inliner.matches(str(tmp_path / "m.js"), "/* rollup-inline-files */")


def test_non_matching_calls_are_kept_verbatim(tmp_path: Path) -> None:
    module_id = str(tmp_path / "mod.js")
    text = MARKER + "const t = fs.readFile(someVariable, 'utf-8');\n"

    assert DeferredReadInliner().rewrite(module_id, text, _context()) == text
