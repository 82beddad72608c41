import json

import pytest

from shared.schema import PullRequest, PullRequestEvent, parse_event_payload


def test_parse_event_from_dict() -> None:
    event = parse_event_payload(
        {
            "action": "edited",
            "pull_request": {"number": 3, "title": "feat: x", "draft": False, "user": {"login": "octocat"}},
            "repository": {"full_name": "org/repo", "private": True},
            "sender": {"login": "octocat"},
        }
    )
    assert event.action == "edited"
    assert event.pull_request == PullRequest(title="feat: x", draft=False, number=3)
    assert event.repository is not None
    assert event.repository.full_name == "org/repo"


def test_parse_event_from_json_bytes() -> None:
    raw = json.dumps({"pull_request": {"title": "fix: y", "draft": True}}).encode("utf-8")
    event = parse_event_payload(raw)
    assert event.pull_request is not None
    assert event.pull_request.draft is True


def test_null_title_and_draft_default() -> None:
    event = parse_event_payload({"pull_request": {"title": None, "draft": None}})
    assert event.pull_request == PullRequest(title="", draft=False)


def test_missing_title_and_draft_default() -> None:
    event = parse_event_payload({"pull_request": {"number": 1}})
    assert event.pull_request is not None
    assert event.pull_request.title == ""
    assert event.pull_request.draft is False


@pytest.mark.parametrize("value", [None, "pull_request", 5, []])
def test_non_object_pull_request_is_treated_as_absent(value) -> None:
    assert parse_event_payload({"pull_request": value}).pull_request is None


def test_no_pull_request_key() -> None:
    assert parse_event_payload({"ref": "refs/heads/main"}) == PullRequestEvent()


def test_invalid_json_raises_value_error() -> None:
    with pytest.raises(ValueError, match="not valid JSON"):
        parse_event_payload("{oops")


def test_non_object_payload_raises_value_error() -> None:
    with pytest.raises(ValueError, match="must be a JSON object"):
        parse_event_payload("[]")


def test_wrong_title_type_fails_validation() -> None:
    with pytest.raises(ValueError, match="schema validation"):
        parse_event_payload({"pull_request": {"title": ["feat: x"], "draft": False}})


def test_empty_pull_request_object_is_present() -> None:
    event = parse_event_payload({"pull_request": {}})
    assert event.pull_request == PullRequest()


@pytest.mark.parametrize(
    "payload",
    [
        {"action": 5},
        {"action": ["opened"]},
        {"repository": "org/repo"},
        {"repository": {"full_name": 42}},
    ],
)
def test_unexpected_context_types_are_dropped(payload: dict) -> None:
    event = parse_event_payload({**payload, "pull_request": {"title": "feat: x", "draft": False}})
    assert event.pull_request == PullRequest(title="feat: x", draft=False)
    assert event.action is None
    assert event.repository is None or event.repository.full_name is None


@pytest.mark.parametrize("number", ["PR-1", True, 1.5, {"id": 1}])
def test_unexpected_number_type_is_dropped(number) -> None:
    event = parse_event_payload({"pull_request": {"title": "feat: x", "number": number}})
    assert event.pull_request is not None
    assert event.pull_request.number is None


def test_schema_error_message_is_single_line() -> None:
    with pytest.raises(ValueError) as excinfo:
        parse_event_payload({"pull_request": {"title": 5}})
    message = str(excinfo.value)
    assert message.startswith("Event payload failed schema validation: pull_request.title:")
    assert "\n" not in message
