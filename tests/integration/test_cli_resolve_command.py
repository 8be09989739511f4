from __future__ import annotations

import io
import json
from pathlib import Path

from bundle_stages.cli import run


def test_resolve_prints_aliased_specifier(tmp_path: Path) -> None:
    out_stream = io.StringIO()
    err_stream = io.StringIO()

    status = run(
        ["--root", str(tmp_path), "resolve", "utf-8-validate"],
        out_stream=out_stream,
        err_stream=err_stream,
    )

    assert status == 0
    payload = json.loads(out_stream.getvalue())
    assert payload == {
        "external": False,
        "resolved": "utf-8-validate/fallback.js",
        "specifier": "utf-8-validate",
    }
    assert err_stream.getvalue() == ""


def test_resolve_reports_builtins_as_external(tmp_path: Path) -> None:
    out_stream = io.StringIO()

    run(["--root", str(tmp_path), "resolve", "node:path"], out_stream=out_stream)

    payload = json.loads(out_stream.getvalue())
    assert payload["external"] is True
    assert payload["resolved"] == "node:path"


def test_dependency_flag_writes_build_log(tmp_path: Path) -> None:
    data_dir = tmp_path / "state"

    run(
        [
            "--root",
            str(tmp_path),
            "--data-dir",
            str(data_dir),
            "--log-dependencies",
            "resolve",
            "kleur/colors",
            "--importer",
            "/src/cli.js",
        ],
        out_stream=io.StringIO(),
        err_stream=io.StringIO(),
    )

    log_path = data_dir / "build.jsonl"
    assert log_path.exists()
    event = json.loads(log_path.read_text(encoding="utf-8").splitlines()[-1])
    assert event["message"] == "kleur imported by /src/cli.js"
