"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from bundle_stages.aliases.externals import DEFAULT_EXTRA_EXTERNALS

CONFIG_FILE_NAME = "bundle_stages.toml"
VERSION_TOKEN = "process.env.VERSION"
MINIFY_ENGINES = ("rjsmin", "terser")
DEBUG_ENV_VARS = ("BUNDLE_STAGES_DEBUG", "DEBUG")
WARN_THRESHOLD_MS_CAP = 10 * 60 * 1000


@dataclass(slots=True, frozen=True)
class MinifyConfig:
    """Minification stage settings."""

    engine: str = "rjsmin"
    compress: bool = False
    sourcemap: bool = False
    warn_threshold_ms: int = 50
    terser_command: str = "terser"


@dataclass(slots=True, frozen=True)
class RewriteConfig:
    """Settings consumed by the pattern-gated rewriters."""

    platforms_dir: Path | None = None
    template: str = "treemap"


@dataclass(slots=True, frozen=True)
class BuildConfig:
    """Fully merged build configuration."""

    root: Path
    data_dir: Path
    version: str | None
    replace: tuple[tuple[str, str], ...]
    externals: tuple[str, ...]
    log_dependencies: bool
    debug: bool
    minify: MinifyConfig
    rewrite: RewriteConfig

    def replacements(self) -> dict[str, str]:
        """Return token -> replacement text, including the version token."""
        values: dict[str, str] = {}
        if self.version is not None:
            values[VERSION_TOKEN] = json.dumps(self.version)
        for token, replacement in self.replace:
            values[token] = replacement
        return values

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "root": str(self.root),
            "data_dir": str(self.data_dir),
            "version": self.version,
            "replace": {token: value for token, value in self.replace},
            "externals": list(self.externals),
            "log_dependencies": self.log_dependencies,
            "debug": self.debug,
            "minify": {
                "engine": self.minify.engine,
                "compress": self.minify.compress,
                "sourcemap": self.minify.sourcemap,
                "warn_threshold_ms": self.minify.warn_threshold_ms,
                "terser_command": self.minify.terser_command,
            },
            "rewrite": {
                "platforms_dir": (
                    str(self.rewrite.platforms_dir) if self.rewrite.platforms_dir else None
                ),
                "template": self.rewrite.template,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    version: str | None = None
    debug: bool | None = None
    log_dependencies: bool | None = None
    engine: str | None = None
    compress: bool | None = None
    sourcemap: bool | None = None
    warn_threshold_ms: int | None = None


def has_debug_flag(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when a debug environment variable is switched on."""
    env = os.environ if environ is None else environ
    for name in DEBUG_ENV_VARS:
        if env.get(name, "").strip().lower() in {"1", "true", "yes"}:
            return True
    return False


def read_package_version(root: Path) -> str | None:
    """Return the 'version' field of root/package.json when present."""
    package_json = root / "package.json"
    if not package_json.exists():
        return None
    payload = json.loads(package_json.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("package.json must contain a top-level object.")
    version = payload.get("version")
    if version is None:
        return None
    if not isinstance(version, str):
        raise ValueError("package.json field 'version' must be a string.")
    return version


def default_config(root: Path, environ: Mapping[str, str] | None = None) -> BuildConfig:
    """Build default config for a given project root."""
    resolved_root = root.resolve()
    return BuildConfig(
        root=resolved_root,
        data_dir=resolved_root / ".bundle_stages",
        version=read_package_version(resolved_root),
        replace=(),
        externals=DEFAULT_EXTRA_EXTERNALS,
        log_dependencies=False,
        debug=has_debug_flag(environ),
        minify=MinifyConfig(),
        rewrite=RewriteConfig(),
    )


def load_repo_config_file(root: Path) -> dict[str, object]:
    """Load optional bundle_stages.toml from the project root."""
    config_path = root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, name: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{name}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{name}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_str(value: object, name: str, default: str | None) -> str | None:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value


def _optional_engine(value: object, name: str, default: str) -> str:
    engine = _optional_str(value, name, default)
    if engine not in MINIFY_ENGINES:
        raise ValueError(f"Config field '{name}' must be one of {', '.join(MINIFY_ENGINES)}.")
    return engine


def _optional_non_negative_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Config field '{name}' must be a non-negative integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value


def merge_config(
    base: BuildConfig, repo_payload: dict[str, object], overrides: CliOverrides
) -> BuildConfig:
    """Merge defaults, repo config, then CLI/startup overrides."""
    build_payload = _get_table(repo_payload, "build")
    replace_payload = _get_table(repo_payload, "replace")
    minify_payload = _get_table(repo_payload, "minify")
    rewrite_payload = _get_table(repo_payload, "rewrite")

    replace: list[tuple[str, str]] = list(base.replace)
    for token, value in replace_payload.items():
        if not isinstance(value, str):
            raise ValueError(f"Config field 'replace.{token}' must be a string.")
        replace.append((token, value))

    externals = base.externals
    if "externals" in build_payload:
        externals = _tuple_of_strings(build_payload["externals"], "build.externals")

    platforms_dir = base.rewrite.platforms_dir
    raw_platforms_dir = _optional_str(
        rewrite_payload.get("platforms_dir"), "rewrite.platforms_dir", None
    )
    if raw_platforms_dir is not None:
        platforms_dir = (base.root / raw_platforms_dir).resolve()

    merged = BuildConfig(
        root=base.root,
        data_dir=base.data_dir,
        version=_optional_str(build_payload.get("version"), "build.version", base.version),
        replace=tuple(replace),
        externals=externals,
        log_dependencies=_optional_bool(
            build_payload.get("log_dependencies"),
            "build.log_dependencies",
            base.log_dependencies,
        ),
        debug=_optional_bool(build_payload.get("debug"), "build.debug", base.debug),
        minify=MinifyConfig(
            engine=_optional_engine(
                minify_payload.get("engine"), "minify.engine", base.minify.engine
            ),
            compress=_optional_bool(
                minify_payload.get("compress"), "minify.compress", base.minify.compress
            ),
            sourcemap=_optional_bool(
                minify_payload.get("sourcemap"), "minify.sourcemap", base.minify.sourcemap
            ),
            warn_threshold_ms=_optional_non_negative_int_with_cap(
                minify_payload.get("warn_threshold_ms"),
                "minify.warn_threshold_ms",
                base.minify.warn_threshold_ms,
                WARN_THRESHOLD_MS_CAP,
            ),
            terser_command=str(
                _optional_str(
                    minify_payload.get("terser_command"),
                    "minify.terser_command",
                    base.minify.terser_command,
                )
            ),
        ),
        rewrite=RewriteConfig(
            platforms_dir=platforms_dir,
            template=str(
                _optional_str(
                    rewrite_payload.get("template"), "rewrite.template", base.rewrite.template
                )
            ),
        ),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: BuildConfig, overrides: CliOverrides) -> BuildConfig:
    """Apply startup overrides at highest precedence."""
    minify = MinifyConfig(
        engine=_optional_engine(overrides.engine, "overrides.engine", config.minify.engine),
        compress=(
            overrides.compress if overrides.compress is not None else config.minify.compress
        ),
        sourcemap=(
            overrides.sourcemap if overrides.sourcemap is not None else config.minify.sourcemap
        ),
        warn_threshold_ms=_optional_non_negative_int_with_cap(
            overrides.warn_threshold_ms,
            "overrides.warn_threshold_ms",
            config.minify.warn_threshold_ms,
            WARN_THRESHOLD_MS_CAP,
        ),
        terser_command=config.minify.terser_command,
    )
    data_dir = overrides.data_dir or config.data_dir
    return BuildConfig(
        root=config.root,
        data_dir=data_dir.resolve(),
        version=overrides.version if overrides.version is not None else config.version,
        replace=config.replace,
        externals=config.externals,
        log_dependencies=(
            overrides.log_dependencies
            if overrides.log_dependencies is not None
            else config.log_dependencies
        ),
        debug=overrides.debug if overrides.debug is not None else config.debug,
        minify=minify,
        rewrite=config.rewrite,
    )


def load_effective_config(
    root: Path,
    overrides: CliOverrides | None = None,
    environ: Mapping[str, str] | None = None,
) -> BuildConfig:
    """Load effective config using merge order defaults -> repo config -> overrides."""
    resolved_root = root.resolve()
    base = default_config(resolved_root, environ=environ)
    payload = load_repo_config_file(resolved_root)
    return merge_config(base, payload, overrides or CliOverrides())
