from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Union

import httpx

Handler = Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]


def respond(status: int = 200, content_length: str | None = "100") -> httpx.Response:
    response_headers = {} if content_length is None else {"Content-Length": content_length}
    return httpx.Response(status, headers=response_headers)


def by_host_header(table: dict[str, tuple[int, str | None]]) -> Handler:
    """Answer according to the Host header the server would see."""

    def handler(request: httpx.Request) -> httpx.Response:
        status, length = table[request.headers["host"]]
        return respond(status, length)

    return handler


def slow(delay: float, status: int = 200) -> Handler:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delay)
        return respond(status)

    return handler
