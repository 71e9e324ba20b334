import pytest
from flask import Flask

from tvgate.credential_cache import CredentialCache
from tvgate.plugins.zee5 import Zee5Provider
from tvgate.secureurl import URLCodec


class FakeTimer:
    """Manually advanced clock for TTL tests."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def codec():
    return URLCodec('test-secret')


@pytest.fixture
def cache(timer):
    return CredentialCache(maxsize=50, ttl=3600, timer=timer)


@pytest.fixture
def provider(codec, cache):
    return Zee5Provider(codec, cache=cache, user_agent='test-agent')


@pytest.fixture
def client(provider):
    app = Flask(__name__)
    provider.register_routes(app)
    return app.test_client()
