"""Pull request title guard.

Runs as a CI step on ``pull_request`` events. Reads the action inputs and the
event payload written by the runner, then checks the PR title against the
Conventional Commit convention ``type(scope): subject``:

- draft PRs are rejected unless ``allow-draft`` is set (checked before the
  title is parsed);
- the title must match the convention;
- the type must be one of ``allowed-types``;
- a scope must be present when ``require-scope`` is set.

On success the trimmed title is exported as the ``normalized-title`` step
output. Any failure prints a single ``::error::`` annotation and exits 1.
"""

from __future__ import annotations

import argparse
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from shared import github_actions
from shared.constants import (
    ALLOW_DRAFT_INPUT,
    ALLOWED_TYPES_INPUT,
    EVENT_PATH_ENV,
    EXIT_FAILURE,
    EXIT_OK,
    NORMALIZED_TITLE_OUTPUT,
    OUTPUT_PATH_ENV,
    REQUIRE_SCOPE_INPUT,
)
from shared.logging import get_logger
from shared.schema import PullRequest, PullRequestEvent, parse_event_payload

logger = get_logger("title_guard")

# type, optional non-empty (scope), colon, whitespace, subject
TITLE_PATTERN = re.compile(r"^([a-z]+)(?:\(([^)]+)\))?:\s.+")

EXPECTED_FORMAT = "type(scope?): subject"


class GuardError(Exception):
    """Terminal failure of a guard run."""


class InputError(GuardError):
    """The pipeline handed the guard a missing or inapplicable event."""


class PolicyViolation(GuardError):
    """The pull request does not follow the title convention."""


@dataclass(frozen=True)
class GuardConfig:
    allowed_types: tuple[str, ...] = ()
    require_scope: bool = False
    allow_draft: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GuardConfig":
        return cls(
            allowed_types=github_actions.get_list_input(ALLOWED_TYPES_INPUT, environ=environ),
            require_scope=github_actions.get_bool_input(REQUIRE_SCOPE_INPUT, environ=environ),
            allow_draft=github_actions.get_bool_input(ALLOW_DRAFT_INPUT, environ=environ),
        )

    def is_allowed(self, change_type: str) -> bool:
        return change_type.lower() in self.allowed_types


@dataclass(frozen=True)
class TitleMatch:
    type: str
    scope: Optional[str] = None


def load_event(event_path: Optional[str]) -> tuple[PullRequestEvent, PullRequest]:
    """Read the event payload and return it with its ``pull_request`` object."""
    if not event_path or not Path(event_path).is_file():
        raise InputError(f"{EVENT_PATH_ENV} missing; cannot read PR payload")

    try:
        raw = Path(event_path).read_bytes()
    except OSError as exc:
        raise InputError(f"Event payload is unreadable: {exc}") from exc

    try:
        event = parse_event_payload(raw)
    except ValueError as exc:
        raise InputError(f"Event payload is unreadable: {exc}") from exc

    if event.pull_request is None:
        raise InputError("This action only runs on pull_request events")
    return event, event.pull_request


def parse_title(title: str) -> Optional[TitleMatch]:
    match = TITLE_PATTERN.match(title.strip())
    if not match:
        return None
    return TitleMatch(type=match.group(1), scope=match.group(2))


def validate_pull_request(config: GuardConfig, title: str, draft: bool) -> str:
    """Apply the policy checks in order and return the normalized title."""
    if draft and not config.allow_draft:
        raise PolicyViolation("Draft pull requests are not allowed")

    normalized = title.strip()
    parsed = parse_title(normalized)
    if parsed is None:
        raise PolicyViolation(f"Title must follow Conventional Commit format: {EXPECTED_FORMAT}")

    if not config.is_allowed(parsed.type):
        allowed = ", ".join(config.allowed_types) or "(none)"
        raise PolicyViolation(f'Type "{parsed.type}" is not allowed. Allowed: {allowed}')

    if config.require_scope and not parsed.scope:
        raise PolicyViolation("Scope is required: type(scope): subject")

    return normalized


def run_guard(config: GuardConfig, event_path: Optional[str], output_path: Optional[str]) -> str:
    event, pr = load_event(event_path)

    log = logger.bind(
        event_path=event_path,
        repo=event.repository.full_name if event.repository else None,
        pr_number=pr.number,
        event_action=event.action,
    )

    try:
        title = validate_pull_request(config, pr.title, pr.draft)
    except PolicyViolation as exc:
        log.info("title_rejected", extra={"extra": {"reason": str(exc), "draft": pr.draft}})
        raise

    written = github_actions.set_output(NORMALIZED_TITLE_OUTPUT, title, output_path)
    log.info("title_accepted", extra={"extra": {"title": title, "output_written": written}})
    print(f"Title accepted: {title}")
    return title


def _parse_args(argv: Optional[list[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a pull request title against Conventional Commits")
    parser.add_argument(
        "--event-path",
        default=None,
        help=f"Path to the event payload JSON (defaults to ${EVENT_PATH_ENV})",
    )
    parser.add_argument(
        "--output-path",
        default=None,
        help=f"File to append step outputs to (defaults to ${OUTPUT_PATH_ENV})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    args = _parse_args(argv)
    env = os.environ if environ is None else environ

    config = GuardConfig.from_env(env)
    logger.debug(
        "title_guard_config_loaded",
        extra={
            "extra": {
                "allowed_types": list(config.allowed_types),
                "require_scope": config.require_scope,
                "allow_draft": config.allow_draft,
            }
        },
    )

    event_path = args.event_path or env.get(EVENT_PATH_ENV)
    try:
        run_guard(config, event_path=event_path, output_path=args.output_path or env.get(OUTPUT_PATH_ENV))
    except InputError as exc:
        logger.warning("event_input_error", extra={"event_path": event_path, "extra": {"reason": str(exc)}})
        github_actions.error(str(exc), stream=sys.stderr)
        return EXIT_FAILURE
    except PolicyViolation as exc:
        github_actions.error(str(exc), stream=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
