"""Point references to the optional JSX syntax plugin at an inert module."""

from __future__ import annotations

import re
from dataclasses import dataclass

from bundle_stages.rewriters.base import RewriteContext, js_string

JSX_SYNTAX_PACKAGE = "@babel/plugin-syntax-jsx"


@dataclass(slots=True, frozen=True)
class JsxSyntaxShimDisabler:
    """Rewrites quoted `@babel/plugin-syntax-jsx` specifiers to an empty stand-in."""

    empty_module: str
    name: str = "disable-jsx-syntax"
    package: str = JSX_SYNTAX_PACKAGE

    def _pattern(self) -> re.Pattern[str]:
        return re.compile(r"(['\"`])" + re.escape(self.package) + r"\1")

    def matches(self, module_id: str, text: str) -> bool:
        _ = module_id
        if self.package not in text:
            return False
        return self._pattern().search(text) is not None

    def rewrite(self, module_id: str, text: str, context: RewriteContext) -> str | None:
        _ = context
        if not self.matches(module_id, text):
            return None
        replacement = js_string(self.empty_module)
        return self._pattern().sub(lambda _match: replacement, text)
