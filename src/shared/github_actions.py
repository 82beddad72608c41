"""Helpers for talking to the GitHub Actions runner.

Covers the three channels an action uses: inputs (``INPUT_*`` environment
variables), step outputs (lines appended to the ``$GITHUB_OUTPUT`` file) and
workflow-command annotations printed to the log (``::error::message``).
"""

from __future__ import annotations

import os
import sys
import uuid
from typing import Mapping, Optional, TextIO

from shared.constants import INPUT_ENV_PREFIX

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}
_FALSY = {"0", "false", "f", "no", "n", "off"}


def input_env_name(name: str) -> str:
    return f"{INPUT_ENV_PREFIX}{name.replace(' ', '_').upper()}"


def get_input(name: str, default: str = "", environ: Optional[Mapping[str, str]] = None) -> str:
    """Read an action input, trimmed, returning ``default`` when blank.

    The runner keeps hyphens in input names (``INPUT_ALLOW-DRAFT``). Most
    shells cannot export such names, so the all-underscore spelling is
    accepted as a fallback for local runs.
    """
    env = os.environ if environ is None else environ
    key = input_env_name(name)
    raw = env.get(key)
    if raw is None:
        raw = env.get(key.replace("-", "_"))
    return (raw or "").strip() or default


def get_bool_input(name: str, default: bool = False, environ: Optional[Mapping[str, str]] = None) -> bool:
    normalized = get_input(name, environ=environ).lower()
    if not normalized:
        return default
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    return default


def get_list_input(name: str, environ: Optional[Mapping[str, str]] = None) -> tuple[str, ...]:
    """Split a comma-separated input into lowercase, deduplicated entries."""
    items: list[str] = []
    seen: set[str] = set()
    for part in get_input(name, environ=environ).split(","):
        item = part.strip().lower()
        if item and item not in seen:
            seen.add(item)
            items.append(item)
    return tuple(items)


def set_output(name: str, value: str, output_path: Optional[str]) -> bool:
    """Append a step output to the runner's output file.

    Returns False without touching the filesystem when no output file is
    configured, e.g. when running outside a workflow.
    """
    if not output_path:
        return False

    if "\n" in value or "\r" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        line = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        line = f"{name}={value}\n"

    with open(output_path, "a", encoding="utf-8") as fh:
        fh.write(line)
    return True


def escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_annotation(level: str, message: str) -> str:
    return f"::{level}::{escape_data(message)}"


def error(message: str, stream: Optional[TextIO] = None) -> None:
    print(format_annotation("error", message), file=stream or sys.stderr)
