import pytest

from ircconnector.config.core import Config
from ircconnector.logging_config import error_aggregator

from tests.fixtures.fakes import FakeConnection


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    yield
    error_aggregator.clear()


@pytest.fixture
def make_config():
    """Build a Config from a URI list and flat settings.

    The STARTTLS timer is disabled unless a test sets it explicitly.
    """

    def _make(uris=None, **settings):
        settings.setdefault("nickname", "Erebot")
        settings.setdefault("identity", "identity")
        settings.setdefault("hostname", "hostname")
        settings.setdefault("realname", "realname")
        settings.setdefault("starttls_timeout", 0)
        return Config.from_dict({"uris": uris or ["ircs://0.0.0.0/"], "settings": settings})

    return _make


@pytest.fixture
def make_connection(make_config):
    def _make(uris=None, **settings):
        return FakeConnection(make_config(uris, **settings))

    return _make
