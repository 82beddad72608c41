#!/usr/bin/env python3
import os
import pathlib
import sys
import tempfile

sys.path.append("src")
from title_guard.app import main  # noqa: E402


def main_local() -> int:
    payload_path = pathlib.Path("scripts/sample_pull_request_opened.json")

    env = {
        "INPUT_ALLOWED_TYPES": os.getenv("ALLOWED_TYPES", "feat,fix,chore,docs,refactor,test"),
        "INPUT_REQUIRE_SCOPE": os.getenv("REQUIRE_SCOPE", "false"),
        "INPUT_ALLOW_DRAFT": os.getenv("ALLOW_DRAFT", "false"),
    }

    with tempfile.TemporaryDirectory() as tmp:
        output_path = pathlib.Path(tmp) / "github_output"
        code = main(
            ["--event-path", str(payload_path), "--output-path", str(output_path)],
            environ=env,
        )
        outputs = output_path.read_text(encoding="utf-8") if output_path.exists() else ""

    print(f"exit code: {code}")
    print(f"outputs: {outputs.strip() or '(none)'}")
    return code


if __name__ == "__main__":
    raise SystemExit(main_local())
