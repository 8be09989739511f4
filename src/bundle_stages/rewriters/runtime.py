"""Runtime rewriter registry construction."""

from __future__ import annotations

from bundle_stages.aliases.defaults import EMPTY_MODULE, standin_path
from bundle_stages.config import RewriteConfig
from bundle_stages.rewriters.jsx_shim import JsxSyntaxShimDisabler
from bundle_stages.rewriters.platform_dispatch import PlatformDispatchRewriter
from bundle_stages.rewriters.read_inliner import DeferredReadInliner
from bundle_stages.rewriters.registry import RewriterRegistry
from bundle_stages.rewriters.template_assets import TemplateAssetInliner


def build_rewriter_registry(config: RewriteConfig) -> RewriterRegistry:
    """Build rewriter registry from effective config."""
    registry = RewriterRegistry()
    registry.register(DeferredReadInliner())
    registry.register(PlatformDispatchRewriter(platforms_dir=config.platforms_dir))
    registry.register(TemplateAssetInliner(template=config.template))
    registry.register(JsxSyntaxShimDisabler(empty_module=standin_path(EMPTY_MODULE)))
    return registry
