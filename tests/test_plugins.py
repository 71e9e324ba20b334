import logging

from flask import Flask

from tvgate import plugins
from tvgate.plugins.zee5 import Zee5Provider, catalog


def test_init_app_registers_enabled_providers(codec, caplog):
    app = Flask(__name__)
    with caplog.at_level(logging.INFO, logger='tvgate.plugins'):
        active = plugins.init_app(app, ['zee5', 'sonyliv'], codec=codec)

    assert len(active) == 1
    assert isinstance(active[0], Zee5Provider)
    assert active[0].codec is codec
    assert "Plugin zee5 registered" in caplog.text
    assert "Plugin sonyliv not found" in caplog.text

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert {
        '/zee5/<channel_id>',
        '/zee5/render/playlist.m3u8',
        '/zee5/render/segment.ts',
        '/zee5/render/segment.mp4',
    } <= rules


def test_no_enabled_providers(codec):
    app = Flask(__name__)
    assert plugins.init_app(app, [], codec=codec) == []
    assert plugins.get_channels(app) == []
    assert not any(rule.rule.startswith('/zee5') for rule in app.url_map.iter_rules())


def test_get_channels_aggregates_provider_catalogs(codec):
    app = Flask(__name__)
    plugins.init_app(app, ['zee5'], codec=codec)

    channels = plugins.get_channels(app)
    assert channels == catalog.get_channels()
    assert channels[0].url == 'zee5/' + channels[0].id


def test_each_app_gets_its_own_provider(codec):
    first, second = Flask('first'), Flask('second')
    plugins.init_app(first, ['zee5'], codec=codec)
    plugins.init_app(second, ['zee5'], codec=codec)

    cache_one = first.extensions[plugins.EXTENSION_KEY][0].cache
    cache_two = second.extensions[plugins.EXTENSION_KEY][0].cache
    assert cache_one is not cache_two
