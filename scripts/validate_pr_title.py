#!/usr/bin/env python3
"""Validate the current pull request's title inside a CI job.

Reads the action inputs and ``$GITHUB_EVENT_PATH`` from the environment and
exits non-zero when the title breaks the Conventional Commit convention.
"""

from __future__ import annotations

import pathlib
import sys

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))
from title_guard.app import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
