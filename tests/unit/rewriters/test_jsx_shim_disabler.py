from __future__ import annotations

from bundle_stages.aliases import standin_path
from bundle_stages.diagnostics import BuildDiagnostics
from bundle_stages.rewriters import JsxSyntaxShimDisabler, RewriteContext, js_string


def _disabler() -> JsxSyntaxShimDisabler:
    return JsxSyntaxShimDisabler(empty_module=standin_path("empty.js"))


def test_quoted_references_point_at_empty_module() -> None:
    text = (
        'const jsx = require("@babel/plugin-syntax-jsx");\n'
        "import syntax from '@babel/plugin-syntax-jsx';\n"
    )

    rewritten = _disabler().rewrite("/m/babel-preset.js", text, RewriteContext(BuildDiagnostics()))

    empty = js_string(standin_path("empty.js"))
    assert rewritten == f"const jsx = require({empty});\nimport syntax from {empty};\n"


def test_modules_without_reference_are_not_matched() -> None:
    disabler = _disabler()
    text = 'const ts = require("@babel/plugin-syntax-typescript");\n'

    assert not disabler.matches("/m/x.js", text)
    assert disabler.rewrite("/m/x.js", text, RewriteContext(BuildDiagnostics())) is None


def test_longer_package_names_and_unquoted_mentions_are_ignored() -> None:
    disabler = _disabler()
    text = (
        "// uses @babel/plugin-syntax-jsx internally\n"
        'require("@babel/plugin-syntax-jsx-extra");\n'
    )

    assert not disabler.matches("/m/x.js", text)
