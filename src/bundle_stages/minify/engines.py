"""Minifier engines backed by rjsmin or an external terser executable."""

from __future__ import annotations

import subprocess
import tempfile
from pathlib import Path

import rjsmin

from bundle_stages.config import MinifyConfig
from bundle_stages.minify.models import Minifier, MinifyOptions, MinifyOutput


class MinifierCommandError(RuntimeError):
    """Raised when an external minifier process exits unsuccessfully."""

    def __init__(self, command: tuple[str, ...], returncode: int, stderr: str) -> None:
        super().__init__(f"{command[0]} exited with status {returncode}: {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class RJSMinMinifier:
    """Whitespace and comment stripping through rjsmin; never emits a map."""

    name = "rjsmin"

    def minify(self, code: str, options: MinifyOptions) -> MinifyOutput:
        return MinifyOutput(code=rjsmin.jsmin(code, keep_bang_comments=options.comments))

    def unsupported_options(self, options: MinifyOptions) -> tuple[str, ...]:
        """rjsmin only strips whitespace and comments."""
        requested = (
            ("mangle", options.mangle),
            ("compress", options.compress),
            ("sourcemap", options.sourcemap),
        )
        return tuple(name for name, enabled in requested if enabled)


def terser_arguments(options: MinifyOptions) -> list[str]:
    """Map MinifyOptions onto terser command-line flags."""
    arguments: list[str] = ["--ecma", str(options.ecma)]
    if options.compress:
        arguments.append("--compress")
    if options.mangle:
        arguments.append("--mangle")
    if options.module:
        arguments.append("--module")
    if options.safari10:
        arguments.append("--safari10")
    arguments.extend(["--comments", "all" if options.comments else "false"])
    if options.sourcemap:
        arguments.append("--source-map")
    return arguments


class TerserCommandMinifier:
    """Runs the terser CLI on a temporary copy of the chunk."""

    name = "terser"

    def __init__(self, command: str = "terser", timeout_seconds: float | None = None) -> None:
        self._command = command
        self._timeout_seconds = timeout_seconds

    def command_line(
        self, input_path: Path, output_path: Path, options: MinifyOptions
    ) -> tuple[str, ...]:
        """Return the full argv for one invocation."""
        return (
            self._command,
            str(input_path),
            "--output",
            str(output_path),
            *terser_arguments(options),
        )

    def minify(self, code: str, options: MinifyOptions) -> MinifyOutput:
        with tempfile.TemporaryDirectory(prefix="bundle-stages-") as workdir:
            input_path = Path(workdir) / "chunk.js"
            output_path = Path(workdir) / "chunk.min.js"
            input_path.write_text(code, encoding="utf-8")
            command = self.command_line(input_path, output_path, options)
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                timeout=self._timeout_seconds,
            )
            if completed.returncode != 0:
                raise MinifierCommandError(command, completed.returncode, completed.stderr)
            minified = output_path.read_text(encoding="utf-8") if output_path.exists() else None
            map_path = output_path.with_name(f"{output_path.name}.map")
            source_map = map_path.read_text(encoding="utf-8") if map_path.exists() else None
        return MinifyOutput(code=minified, map=source_map)

    def unsupported_options(self, options: MinifyOptions) -> tuple[str, ...]:
        _ = options
        return ()


def build_minifier(config: MinifyConfig) -> Minifier:
    """Build the configured minifier engine."""
    if config.engine == "terser":
        return TerserCommandMinifier(command=config.terser_command)
    if config.engine == "rjsmin":
        return RJSMinMinifier()
    raise ValueError(f"Unknown minify engine: {config.engine}")


def options_from_config(config: MinifyConfig) -> MinifyOptions:
    """Return the fixed engine options for the configured build mode."""
    return MinifyOptions(compress=config.compress, sourcemap=config.sourcemap)
