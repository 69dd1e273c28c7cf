# tests/conftest.py
import logging
import pytest

from sharpai import RequestExecutor, SdkConfiguration, SharpAISdk

BASE = "http://localhost:8000/"
TOKEN = "test-token"


@pytest.fixture
def config() -> SdkConfiguration:
    return SdkConfiguration(endpoint="http://localhost:8000", bearer_token=TOKEN)

@pytest.fixture
def executor(config) -> RequestExecutor:
    return RequestExecutor(config)

@pytest.fixture
def sdk(config) -> SharpAISdk:
    return SharpAISdk(config=config)

@pytest.fixture
def caplog_debug(caplog):
    caplog.set_level(logging.DEBUG)
    return caplog
