from __future__ import annotations

import importlib.util
import json
import runpy
from pathlib import Path

import pytest


_SCRIPTS_DIR = Path(__file__).resolve().parents[1] / "scripts"
_SCRIPT_PATH = _SCRIPTS_DIR / "validate_pr_title.py"


def _load_module():
    spec = importlib.util.spec_from_file_location("validate_pr_title", _SCRIPT_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_script_exposes_guard_entrypoint() -> None:
    from title_guard.app import main

    assert _load_module().main is main


def test_script_exit_code_on_rejection(tmp_path: Path, monkeypatch, capsys) -> None:
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"pull_request": {"title": "update stuff", "draft": False}}))
    monkeypatch.setenv("INPUT_ALLOWED_TYPES", "feat")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event))
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.setattr("sys.argv", ["validate_pr_title.py"])

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_path(str(_SCRIPT_PATH), run_name="__main__")

    assert excinfo.value.code == 1
    assert "::error::Title must follow Conventional Commit format" in capsys.readouterr().err


def test_sample_payload_is_accepted(tmp_path: Path, capsys) -> None:
    from title_guard.app import main

    output = tmp_path / "out"
    code = main(
        ["--event-path", str(_SCRIPTS_DIR / "sample_pull_request_opened.json"), "--output-path", str(output)],
        environ={"INPUT_ALLOWED_TYPES": "feat", "INPUT_REQUIRE_SCOPE": "true"},
    )
    assert code == 0
    assert output.read_text(encoding="utf-8") == "normalized-title=feat(auth): add login endpoint\n"
