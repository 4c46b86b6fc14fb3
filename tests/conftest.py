from __future__ import annotations

import pytest

from core.config import AppSettings
from core.domain.models import HeaderSet


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        http_timeout_seconds=5.0,
        request_deadline_seconds=5.0,
        max_concurrency=10,
        proxy_url=None,
    )


@pytest.fixture
def headers() -> HeaderSet:
    return HeaderSet.from_mapping({"User-Agent": "hostroute-tests", "Accept-Language": "en-US"})
