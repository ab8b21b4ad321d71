"""Pytest configuration and fixtures."""

from types import MappingProxyType
from unittest.mock import AsyncMock

import pytest

from acronym_bot.config import Settings
from slack_payloads import OAUTH_TOKEN, SIGNING_SECRET, VERIFICATION_TOKEN


@pytest.fixture
def settings():
    return Settings(
        slack_verification_token=VERIFICATION_TOKEN,
        slack_oauth_access_token=OAUTH_TOKEN,
        slack_signing_secret=SIGNING_SECRET,
    )


@pytest.fixture
def acronyms():
    return MappingProxyType({"LOL": ("laugh out loud",), "PR": ("pull request", "public relations")})


@pytest.fixture
def dispatcher():
    mock = AsyncMock()
    mock.dispatch = AsyncMock(return_value=None)
    return mock
