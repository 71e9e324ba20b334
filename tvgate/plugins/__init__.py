"""Provider plugins.

Each provider mounts its routes on the Flask app and contributes its channels
to the combined listing.
"""
import logging

from tvgate import config
from tvgate.plugins.zee5 import Zee5Provider
from tvgate.secureurl import URLCodec

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'tvgate_plugins'

PROVIDERS = {
    'zee5': Zee5Provider,
}


def init_app(app, names, codec=None):
    """Registers every enabled provider on app and returns the active ones."""
    if codec is None:
        codec = URLCodec(config.URL_SECRET)

    active = []
    for name in names:
        provider_class = PROVIDERS.get(name)
        if provider_class is None:
            logger.warning(f"Plugin {name} not found")
            continue
        provider = provider_class(codec)
        provider.register_routes(app)
        active.append(provider)
        logger.info(f"Plugin {name} registered")

    app.extensions[EXTENSION_KEY] = active
    return active


def get_channels(app):
    channels = []
    for provider in app.extensions.get(EXTENSION_KEY, []):
        channels.extend(provider.get_channels())
    return channels
