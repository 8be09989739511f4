"""Host-bundler hooks: resolution, per-module transform and chunk rendering."""

from __future__ import annotations

from bundle_stages.aliases import AliasTable, DependencyLog, default_alias_table, is_external
from bundle_stages.config import BuildConfig
from bundle_stages.diagnostics import BuildDiagnostics
from bundle_stages.logging import JsonlBuildLog
from bundle_stages.minify import MinifyStage, RenderedChunk, build_minifier, options_from_config
from bundle_stages.pipeline.models import Chunk, SourceModule, TransformResult
from bundle_stages.pipeline.replace import EnvSubstitution
from bundle_stages.pipeline.shebang import ShebangStore, split_shebang
from bundle_stages.rewriters import RewriteContext, RewriterRegistry, build_rewriter_registry


def shift_source_map(
    source_map: dict[str, object] | None, lines: int
) -> dict[str, object] | None:
    """Return a copy of source_map whose generated lines start `lines` lower."""
    if source_map is None or lines < 1:
        return source_map
    mappings = source_map.get("mappings")
    if not isinstance(mappings, str):
        return source_map
    shifted = dict(source_map)
    shifted["mappings"] = ";" * lines + mappings
    return shifted


class BuildPipeline:
    """Applies aliases before resolution, rewriters on load and minification per chunk.

    One instance serves exactly one build; the shebang store, the dependency
    log and the diagnostics collector are scoped to it.
    """

    def __init__(
        self,
        *,
        aliases: AliasTable,
        rewriters: RewriterRegistry,
        minify_stage: MinifyStage,
        substitution: EnvSubstitution | None = None,
        externals: tuple[str, ...] = (),
        log_dependencies: bool = False,
        diagnostics: BuildDiagnostics | None = None,
    ) -> None:
        self._aliases = aliases
        self._rewriters = rewriters
        self._minify_stage = minify_stage
        self._substitution = substitution or EnvSubstitution()
        self._externals = externals
        self._diagnostics = diagnostics or BuildDiagnostics()
        self._context = RewriteContext(diagnostics=self._diagnostics)
        self._shebangs = ShebangStore()
        self._dependency_log = DependencyLog(self._diagnostics) if log_dependencies else None

    @property
    def diagnostics(self) -> BuildDiagnostics:
        """Return the build's diagnostics collector."""
        return self._diagnostics

    @property
    def dependency_log(self) -> DependencyLog | None:
        return self._dependency_log

    def resolve_id(self, specifier: str, importer: str | None = None) -> str:
        """Apply alias substitution before the host resolves a specifier."""
        if self._dependency_log is not None and not self.is_external(specifier):
            self._dependency_log.observe(specifier, importer)
        return self._aliases.resolve(specifier)

    def is_external(self, specifier: str) -> bool:
        """Return True when the host should leave the specifier unbundled."""
        return is_external(specifier, self._externals)

    def transform(self, code: str, module_id: str) -> TransformResult | None:
        """Run the per-module stages; None means the module passes through verbatim."""
        module = SourceModule.load(module_id, code)
        module = module.with_text(self._shebangs.capture(module_id, module.text))
        module = module.with_text(self._substitution.apply(module.text))

        outcome = self._rewriters.apply(module.module_id, module.text, self._context)
        rewriter_name: str | None = None
        if outcome is not None:
            module = module.with_text(outcome.text)
            rewriter_name = outcome.rewriter

        if not module.changed:
            return None
        return TransformResult(code=module.text, map=None, rewriter=rewriter_name)

    def render_chunk(self, code: str, chunk: Chunk) -> RenderedChunk:
        """Minify a chunk, keeping any interpreter directive verbatim on top."""
        directive, body = split_shebang(code)
        if directive is None:
            directive = self._shebangs.get(chunk.facade_module_id) if chunk.is_entry else None
        rendered = self._minify_stage.render(body, chunk.file_name, self._diagnostics)
        if directive is None:
            return rendered
        if not directive.endswith("\n"):
            directive = f"{directive}\n"
        return RenderedChunk(
            code=f"{directive}{rendered.code}",
            map=shift_source_map(rendered.map, directive.count("\n")),
        )


def build_pipeline(
    config: BuildConfig,
    *,
    build_log: JsonlBuildLog | None = None,
    aliases: AliasTable | None = None,
) -> BuildPipeline:
    """Build the pipeline for one build from effective config."""
    minify_stage = MinifyStage(
        minifier=build_minifier(config.minify),
        options=options_from_config(config.minify),
        warn_threshold_ms=config.minify.warn_threshold_ms,
        debug=lambda: config.debug,
    )
    return BuildPipeline(
        aliases=aliases or default_alias_table(config.root),
        rewriters=build_rewriter_registry(config.rewrite),
        minify_stage=minify_stage,
        substitution=EnvSubstitution(values=config.replacements()),
        externals=config.externals,
        log_dependencies=config.log_dependencies,
        diagnostics=BuildDiagnostics(build_log=build_log),
    )
