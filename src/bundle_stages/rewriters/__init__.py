"""Pattern-gated source rewriters."""

from .base import (
    RewriteContext,
    Rewriter,
    inline_file_promise,
    js_string,
    rejected_promise,
    resolved_promise,
)
from .jsx_shim import JsxSyntaxShimDisabler
from .platform_dispatch import PlatformDispatchRewriter, platform_variants, static_dispatch_table
from .read_inliner import DeferredReadInliner
from .registry import RewriteOutcome, RewriterRegistry
from .runtime import build_rewriter_registry
from .template_assets import TemplateAssetInliner, template_path_parts

__all__ = [
    "DeferredReadInliner",
    "JsxSyntaxShimDisabler",
    "PlatformDispatchRewriter",
    "RewriteContext",
    "RewriteOutcome",
    "Rewriter",
    "RewriterRegistry",
    "TemplateAssetInliner",
    "build_rewriter_registry",
    "inline_file_promise",
    "js_string",
    "platform_variants",
    "rejected_promise",
    "resolved_promise",
    "static_dispatch_table",
    "template_path_parts",
]
