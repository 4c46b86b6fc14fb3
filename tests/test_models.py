from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.domain.models import FilterPolicy, HeaderSet, ProbeResult, parse_content_length


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1234", 1234), ("", 0), (None, 0), ("abc", 0), (" 42 ", 42)],
)
def test_parse_content_length(raw, expected):
    assert parse_content_length(raw) == expected


def test_filter_non_verbose_reports_only_200():
    policy = FilterPolicy()

    assert policy.should_emit(200, 0)
    assert not policy.should_emit(404, 50)
    assert not policy.should_emit(301, 100_000)


def test_filter_verbose_reports_any_status():
    policy = FilterPolicy(verbose=True)

    assert policy.should_emit(404, 50)
    assert policy.should_emit(500, 0)


def test_threshold_overrides_verbose():
    policy = FilterPolicy(min_content_length=1000, verbose=True)

    assert not policy.should_emit(200, 500)
    assert not policy.should_emit(404, 999)
    assert policy.should_emit(404, 1000)


def test_threshold_does_not_let_non_200_through_without_verbose():
    policy = FilterPolicy(min_content_length=10)

    assert not policy.should_emit(404, 5000)
    assert policy.should_emit(200, 10)


def test_filter_policy_rejects_negative_threshold():
    with pytest.raises(ValidationError):
        FilterPolicy(min_content_length=-1)


def test_result_message_for_response():
    result = ProbeResult(
        host="https://10.0.0.1",
        domain="a.example.com",
        status_code=404,
        reason="Not Found",
        content_length="50",
    )

    assert result.message == "Host: https://10.0.0.1 Domain: a.example.com Code: 404 Not Found Content-Length: 50"


def test_result_message_keeps_empty_content_length():
    result = ProbeResult(host="http://h", domain="d", status_code=200, reason="OK")

    assert result.message.endswith("Code: 200 OK Content-Length: ")


def test_result_message_for_error():
    result = ProbeResult(host="https://10.0.0.9", domain="x.example.com", error="ConnectError: refused")

    assert result.is_error
    assert result.message == "Request to https://10.0.0.9 failed: ConnectError: refused"


def test_header_set_is_case_insensitive_and_last_wins():
    headers = HeaderSet.from_mapping({"user-agent": "a", "User-Agent": "b", "X-Test": "1"})

    assert len(headers) == 2
    assert headers.get("USER-AGENT") == "b"
    assert headers.as_dict() == {"User-Agent": "b", "X-Test": "1"}


def test_header_set_is_immutable():
    headers = HeaderSet.from_mapping({"X-Test": "1"})

    copy = headers.as_dict()
    copy["X-Other"] = "2"

    assert headers.get("X-Other") is None
    with pytest.raises(ValidationError):
        headers.entries = ()
