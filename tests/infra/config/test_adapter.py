import pytest

from storesearch.infra.config.adapter import ConfigAdapter
from storesearch.schemas import SearchConfig, SessionConfig


@pytest.fixture
def sample_config() -> dict:
    return {
        "general": {
            "base_url": "http://localhost:8080/",
            "result_limit": 25,
            "backend": "httpx",
            "timeout": 3,
            "max_connections": 2,
            "user_agent": "test-UA",
            "headers": {"X-Header": "general"},
            "verify_ssl": False,
            "http2": True,
            "trust_env": True,
            "proxy": "http://proxy",
            "proxy_user": "user",
            "proxy_pass": "pass",
        }
    }


def test_search_config_reads_general(sample_config):
    cfg = ConfigAdapter(sample_config).get_search_config()

    assert isinstance(cfg, SearchConfig)
    assert cfg.base_url == "http://localhost:8080"
    assert cfg.result_limit == 25
    assert cfg.backend == "httpx"
    assert cfg.session_cfg == ConfigAdapter(sample_config).get_session_config()


def test_session_config_reads_general(sample_config):
    cfg = ConfigAdapter(sample_config).get_session_config()

    assert cfg == SessionConfig(
        timeout=3.0,
        max_connections=2,
        user_agent="test-UA",
        headers={"X-Header": "general"},
        verify_ssl=False,
        http2=True,
        trust_env=True,
        proxy="http://proxy",
        proxy_user="user",
        proxy_pass="pass",
    )


def test_defaults_when_empty():
    adapter = ConfigAdapter({})

    assert adapter.get_search_config() == SearchConfig()
    assert adapter.get_session_config() == SessionConfig()
    assert adapter.get_backend() == "aiohttp"


def test_defaults_when_none():
    assert ConfigAdapter(None).get_search_config() == SearchConfig()


def test_non_table_general_is_ignored():
    assert ConfigAdapter({"general": "oops"}).get_search_config() == SearchConfig()


@pytest.mark.parametrize("value", [None, "", 3])
def test_invalid_backend_falls_back(value):
    assert ConfigAdapter({"general": {"backend": value}}).get_backend() == "aiohttp"


def test_empty_proxy_strings_become_none():
    cfg = ConfigAdapter(
        {"general": {"proxy": "", "proxy_user": "", "proxy_pass": ""}}
    ).get_session_config()

    assert cfg.proxy is None
    assert cfg.proxy_user is None
    assert cfg.proxy_pass is None


def test_get_config_returns_copy_of_input(sample_config):
    adapter = ConfigAdapter(sample_config)
    sample_config["general"] = {}
    assert adapter.get_config()["general"]["result_limit"] == 25


def test_unsupported_backend_is_rejected():
    adapter = ConfigAdapter({"general": {"backend": "curl"}})

    with pytest.raises(ValueError, match="curl"):
        adapter.get_backend()
    with pytest.raises(ValueError):
        adapter.get_search_config()
