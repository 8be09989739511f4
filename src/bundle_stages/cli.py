"""Command-line entrypoint for running individual build stages."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TextIO

from bundle_stages.config import MINIFY_ENGINES, CliOverrides, load_effective_config
from bundle_stages.diagnostics import BuildError
from bundle_stages.logging import JsonlBuildLog
from bundle_stages.pipeline import BuildPipeline, Chunk, build_pipeline

BUILD_LOG_NAME = "build.jsonl"


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for stage commands."""
    parser = argparse.ArgumentParser(prog="bundle-stages")
    parser.add_argument("--root", required=False, default=".")
    parser.add_argument("--data-dir", required=False, default=None)
    parser.add_argument("--version-string", required=False, default=None)
    parser.add_argument("--debug", action="store_true", default=None)
    parser.add_argument("--log-dependencies", action="store_true", default=None)
    parser.add_argument("--engine", choices=MINIFY_ENGINES, required=False, default=None)
    parser.add_argument("--compress", action="store_true", default=None)
    parser.add_argument("--sourcemap", action="store_true", default=None)
    parser.add_argument("--warn-threshold-ms", type=int, required=False, default=None)

    commands = parser.add_subparsers(dest="command", required=True)

    resolve = commands.add_parser("resolve", help="Apply the alias table to a specifier.")
    resolve.add_argument("specifier")
    resolve.add_argument("--importer", required=False, default=None)

    transform = commands.add_parser("transform", help="Run the per-module stages on a file.")
    transform.add_argument("path")
    transform.add_argument("--output", required=False, default=None)

    minify = commands.add_parser("minify", help="Run the minification stage on a chunk file.")
    minify.add_argument("path")
    minify.add_argument("--output", required=False, default=None)
    minify.add_argument("--entry", action="store_true", default=False)
    return parser


def create_pipeline(root: str, cli_overrides: CliOverrides | None = None) -> BuildPipeline:
    """Create a pipeline from root config and optional overrides."""
    config = load_effective_config(root=Path(root).resolve(), overrides=cli_overrides)
    build_log = JsonlBuildLog(path=config.data_dir / BUILD_LOG_NAME)
    return build_pipeline(config, build_log=build_log)


def _write_text(text: str, output: str | None, out_stream: TextIO) -> None:
    if output is None:
        out_stream.write(text)
        return
    Path(output).write_text(text, encoding="utf-8")


def _run_resolve(pipeline: BuildPipeline, args: argparse.Namespace, out_stream: TextIO) -> None:
    payload = {
        "specifier": args.specifier,
        "resolved": pipeline.resolve_id(args.specifier, args.importer),
        "external": pipeline.is_external(args.specifier),
    }
    out_stream.write(f"{json.dumps(payload, sort_keys=True)}\n")


def _run_transform(pipeline: BuildPipeline, args: argparse.Namespace, out_stream: TextIO) -> None:
    path = Path(args.path).resolve()
    code = path.read_text(encoding="utf-8")
    result = pipeline.transform(code, str(path))
    _write_text(code if result is None else result.code, args.output, out_stream)


def _run_minify(pipeline: BuildPipeline, args: argparse.Namespace, out_stream: TextIO) -> None:
    path = Path(args.path).resolve()
    code = path.read_text(encoding="utf-8")
    chunk = Chunk(
        file_name=path.name,
        code=code,
        facade_module_id=str(path) if args.entry else None,
        is_entry=args.entry,
    )
    rendered = pipeline.render_chunk(code, chunk)
    _write_text(rendered.code, args.output, out_stream)
    if rendered.map is not None and args.output is not None:
        map_path = Path(f"{args.output}.map")
        map_path.write_text(json.dumps(rendered.map), encoding="utf-8")


def run(
    argv: list[str] | None = None,
    out_stream: TextIO | None = None,
    err_stream: TextIO | None = None,
) -> int:
    """Parse arguments, run one command and report diagnostics."""
    out = out_stream or sys.stdout
    err = err_stream or sys.stderr
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        data_dir=Path(args.data_dir).resolve() if args.data_dir is not None else None,
        version=args.version_string,
        debug=args.debug,
        log_dependencies=args.log_dependencies,
        engine=args.engine,
        compress=args.compress,
        sourcemap=args.sourcemap,
        warn_threshold_ms=args.warn_threshold_ms,
    )
    pipeline = create_pipeline(root=args.root, cli_overrides=overrides)
    handlers = {
        "resolve": _run_resolve,
        "transform": _run_transform,
        "minify": _run_minify,
    }
    status = 0
    try:
        handlers[args.command](pipeline, args, out)
    except BuildError as exc:
        err.write(f"error [{exc.stage}]: {exc.reason}\n")
        status = 1
    for warning in pipeline.diagnostics.warnings:
        err.write(f"warning [{warning.stage}]: {warning.message}\n")
    return status


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the bundle-stages command."""
    return run(argv)


if __name__ == "__main__":
    raise SystemExit(main())
