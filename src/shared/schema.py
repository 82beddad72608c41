import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


def _of_type_or_none(value: Any, expected: type) -> Any:
    # bool is an int subclass but never a valid PR number
    if isinstance(value, bool) and expected is not bool:
        return None
    return value if isinstance(value, expected) else None


class Repository(BaseModel):
    model_config = ConfigDict(extra="ignore")

    full_name: Optional[str] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def lenient_full_name(cls, value: Any) -> Any:
        return _of_type_or_none(value, str)


class PullRequest(BaseModel):
    """The subset of a ``pull_request`` webhook object the title guard reads.

    Only ``title`` and ``draft`` drive the checks. ``number`` is log context,
    so an unexpected type is dropped instead of failing the run.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    draft: bool = False
    number: Optional[int] = None

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("draft", mode="before")
    @classmethod
    def default_draft(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("number", mode="before")
    @classmethod
    def lenient_number(cls, value: Any) -> Any:
        return _of_type_or_none(value, int)


class PullRequestEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    action: Optional[str] = None
    pull_request: Optional[PullRequest] = None
    """Absent on every event type other than ``pull_request``/``pull_request_target``."""
    repository: Optional[Repository] = None

    @field_validator("action", mode="before")
    @classmethod
    def lenient_action(cls, value: Any) -> Any:
        return _of_type_or_none(value, str)

    @field_validator("pull_request", mode="before")
    @classmethod
    def drop_non_object(cls, value: Any) -> Any:
        # null or a non-object pull_request means the event is not a PR event
        if not isinstance(value, dict):
            return None
        return value

    @field_validator("repository", mode="before")
    @classmethod
    def lenient_repository(cls, value: Any) -> Any:
        return _of_type_or_none(value, dict)


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "payload"
    return f"{location}: {first.get('msg', 'invalid value')}"


def parse_event_payload(raw: str | bytes | dict) -> PullRequestEvent:
    if isinstance(raw, dict):
        parsed: Any = raw
    else:
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError("Event payload is not valid JSON") from exc

    if not isinstance(parsed, dict):
        raise ValueError("Event payload must be a JSON object")

    try:
        return PullRequestEvent.model_validate(parsed)
    except ValidationError as exc:
        raise ValueError(f"Event payload failed schema validation: {_describe_validation_error(exc)}") from exc
