from unittest.mock import patch, MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from tvgate import config, fetcher
from tvgate.errors import UpstreamUnavailable, UpstreamStatusError


def make_response(status_code=200, content=b"", headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.headers = CaseInsensitiveDict(headers or {})
    return response


def test_fetch_content_returns_body_and_headers():
    upstream = make_response(content=b"#EXTM3U", headers={'Content-Type': 'application/x-mpegURL'})
    with patch('tvgate.fetcher.requests.get', return_value=upstream) as mock_get:
        body, headers = fetcher.fetch_content("https://cdn.example/a.m3u8", "agent/1.0")

    assert body == b"#EXTM3U"
    assert headers['content-type'] == 'application/x-mpegURL'
    kwargs = mock_get.call_args.kwargs
    assert kwargs['headers'] == {'User-Agent': 'agent/1.0'}
    assert kwargs['timeout'] == config.REQUEST_TIMEOUT
    upstream.close.assert_called_once()


def test_default_user_agent_is_player():
    with patch('tvgate.fetcher.requests.get', return_value=make_response()) as mock_get:
        fetcher.fetch_content("https://cdn.example/a.m3u8")
    assert mock_get.call_args.kwargs['headers'] == {'User-Agent': config.PLAYER_USER_AGENT}


@pytest.mark.parametrize("status", [301, 403, 404, 500])
def test_non_success_status_raises(status):
    upstream = make_response(status_code=status)
    with patch('tvgate.fetcher.requests.get', return_value=upstream):
        with pytest.raises(UpstreamStatusError) as excinfo:
            fetcher.fetch_content("https://cdn.example/a.ts")

    assert excinfo.value.status_code == status
    upstream.close.assert_called_once()


@pytest.mark.parametrize("error", [requests.ConnectionError("refused"), requests.Timeout("slow")])
def test_transport_failure_raises_upstream_unavailable(error):
    with patch('tvgate.fetcher.requests.get', side_effect=error):
        with pytest.raises(UpstreamUnavailable):
            fetcher.open_content("https://cdn.example/a.ts")


def test_open_content_streams():
    upstream = make_response()
    with patch('tvgate.fetcher.requests.get', return_value=upstream) as mock_get:
        assert fetcher.open_content("https://cdn.example/a.ts") is upstream

    assert mock_get.call_args.kwargs['stream'] is True
    upstream.close.assert_not_called()


def test_rotating_proxy_is_applied():
    with patch.object(config, 'PROXY_LIST', ['socks5h://10.0.0.2:1080']), \
            patch('tvgate.fetcher.requests.get', return_value=make_response()) as mock_get:
        fetcher.fetch_content("https://cdn.example/a.m3u8")

    assert mock_get.call_args.kwargs['proxies'] == {
        'http': 'socks5h://10.0.0.2:1080',
        'https': 'socks5h://10.0.0.2:1080',
    }
