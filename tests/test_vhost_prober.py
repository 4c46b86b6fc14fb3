from __future__ import annotations

import httpx
import pytest

from adapters.vhost_prober import VHostProber
from core.domain.models import HeaderSet, ProbeTarget

from helpers import respond, slow


@pytest.mark.asyncio
async def test_domain_is_sent_as_host_header(headers):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return respond(200, "1234")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        prober = VHostProber(client, headers=headers)
        result = await prober.probe(ProbeTarget(host="https://10.0.0.1", domain="staging.example.com"))

    assert seen[0].url.host == "10.0.0.1"
    assert seen[0].headers["host"] == "staging.example.com"
    assert seen[0].headers["user-agent"] == "hostroute-tests"
    assert seen[0].headers["accept-language"] == "en-US"
    assert result.status_code == 200
    assert result.reason == "OK"
    assert result.content_length == "1234"
    assert not result.is_error


@pytest.mark.asyncio
async def test_host_entry_in_header_set_does_not_replace_domain():
    headers = HeaderSet.from_mapping({"Host": "ignored.example.com", "X-Test": "1"})
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return respond()

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await VHostProber(client, headers=headers).probe(ProbeTarget(host="http://10.0.0.1", domain="a.example.com"))

    assert seen[0].headers.get_list("host") == ["a.example.com"]
    assert seen[0].headers["x-test"] == "1"


@pytest.mark.asyncio
async def test_header_set_overrides_client_defaults():
    headers = HeaderSet.from_mapping({"Accept": "text/plain"})
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return respond()

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await VHostProber(client, headers=headers).probe(ProbeTarget(host="http://10.0.0.1", domain="a"))

    assert seen[0].headers["accept"] == "text/plain"


@pytest.mark.asyncio
async def test_missing_content_length_is_kept_empty(headers):
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: respond(200, None))) as client:
        result = await VHostProber(client, headers=headers).probe(ProbeTarget(host="http://h", domain="d"))

    assert result.content_length == ""


@pytest.mark.asyncio
async def test_transport_error_becomes_result(headers):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await VHostProber(client, headers=headers).probe(
            ProbeTarget(host="https://10.0.0.9", domain="a.example.com")
        )

    assert result.is_error
    assert result.status_code is None
    assert result.message == "Request to https://10.0.0.9 failed: ConnectError: connection refused"


@pytest.mark.asyncio
async def test_malformed_host_becomes_result(headers):
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: respond())) as client:
        result = await VHostProber(client, headers=headers).probe(
            ProbeTarget(host="https://10.0.0.1:notaport", domain="a.example.com")
        )

    assert result.is_error
    assert "https://10.0.0.1:notaport" in result.message


@pytest.mark.asyncio
async def test_deadline_cuts_hung_request(headers):
    async with httpx.AsyncClient(transport=httpx.MockTransport(slow(5.0))) as client:
        prober = VHostProber(client, headers=headers, deadline_seconds=0.05)
        result = await prober.probe(ProbeTarget(host="http://10.0.0.1", domain="a"))

    assert result.is_error
    assert "deadline" in result.error


@pytest.mark.asyncio
async def test_non_ascii_domain_is_sent_as_utf8(headers):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return respond(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await VHostProber(client, headers=headers).probe(
            ProbeTarget(host="http://10.0.0.1", domain="bücher.example.com")
        )

    assert not result.is_error
    assert result.domain == "bücher.example.com"
    assert (b"Host", "bücher.example.com".encode("utf-8")) in seen[0].headers.raw


@pytest.mark.asyncio
async def test_non_ascii_header_value_is_sent_as_utf8():
    headers = HeaderSet.from_mapping({"X-Note": "café"})
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return respond(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await VHostProber(client, headers=headers).probe(ProbeTarget(host="http://10.0.0.1", domain="a"))

    assert not result.is_error
    assert (b"X-Note", "café".encode("utf-8")) in seen[0].headers.raw

