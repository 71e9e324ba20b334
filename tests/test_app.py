import pytest

import app as host


@pytest.fixture
def client():
    return host.app.test_client()


def test_index(client):
    response = client.get('/')
    assert response.status_code == 200
    assert "tvgate is running" in response.get_data(as_text=True)


def test_channels_listing(client):
    response = client.get('/channels')
    assert response.status_code == 200
    data = response.get_json()
    assert isinstance(data, list)
    for item in data:
        assert '/' in item['url']
        assert {'id', 'name', 'logo_url', 'language', 'is_hd'} <= set(item)


def test_playlist_points_back_at_proxy(client):
    response = client.get('/playlist.m3u')
    assert response.status_code == 200
    assert response.mimetype == 'application/vnd.apple.mpegurl'
    lines = response.get_data(as_text=True).split("\n")
    assert lines[0] == "#EXTM3U"
    for extinf, url in zip(lines[1::2], lines[2::2]):
        assert extinf.startswith("#EXTINF:-1")
        assert url.startswith("http://localhost/")
        assert url.endswith(".m3u8")
