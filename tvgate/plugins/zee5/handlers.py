import logging

from flask import request, Response

from tvgate import config, fetcher
from tvgate.credential_cache import CredentialCache, fingerprint
from tvgate.errors import ScrapeError, TokenError, UpstreamUnavailable
from tvgate.manifest import ManifestRewriter
from tvgate.plugins.zee5 import auth, catalog

logger = logging.getLogger(__name__)

MPEGURL = 'application/vnd.apple.mpegurl'
CORS_HEADERS = {'Access-Control-Allow-Origin': '*'}
PASSTHROUGH_HEADERS = ('Content-Type', 'Content-Length', 'Content-Encoding')


def proxy_origin():
    return request.host_url.rstrip('/')


class Zee5Provider:
    """Zee5 live channels, served through rewritten manifests.

    The provider owns its credential cache; every route shares it.
    """

    name = catalog.PROVIDER

    def __init__(self, codec, cache=None, user_agent=None):
        self.codec = codec
        if cache is None:
            cache = CredentialCache(config.CREDENTIAL_CACHE_SIZE, config.CREDENTIAL_CACHE_TTL)
        self.cache = cache
        self.user_agent = user_agent or config.ZEE5_USER_AGENT
        self.rewriter = ManifestRewriter(codec, self.name)

    def register_routes(self, app):
        app.add_url_rule(f'/{self.name}/<channel_id>', f'{self.name}_live', self.live)
        app.add_url_rule(f'/{self.name}/render/playlist.m3u8', f'{self.name}_render_playlist', self.render_playlist)
        app.add_url_rule(f'/{self.name}/render/segment.ts', f'{self.name}_render_ts', self.render_segment)
        app.add_url_rule(f'/{self.name}/render/segment.mp4', f'{self.name}_render_mp4', self.render_segment)

    def get_channels(self):
        return catalog.get_channels()

    def resolve_cookie(self):
        cookie = self.cache.get(fingerprint(self.user_agent))
        if cookie is None:
            cookie = auth.generate_cookie(self.user_agent, self.cache)
        return cookie

    def live(self, channel_id):
        channel_id = channel_id.replace('.m3u8', '', 1)
        channel = catalog.find_channel(channel_id)
        if channel is None:
            return Response("Channel not found", content_type='text/plain', headers={'ID': channel_id})

        try:
            cookie = self.resolve_cookie()
        except ScrapeError as e:
            logger.error(f"Zee5 scraping failed, the extractor needs updating: {e}")
            return f"Error obtaining Zee5 session: {e}", 500
        except UpstreamUnavailable as e:
            logger.warning(f"Zee5 authentication failed: {e}")
            return f"Error obtaining Zee5 session: {e}", 500

        return self.handle_playlist(True, f"{channel.url}?{cookie}")

    def decode_auth(self):
        """Upstream URL carried by the 'auth' parameter, or an error response."""
        token = request.args.get('auth', '').strip()
        if not token:
            return None, ("missing auth param", 400)
        try:
            return self.codec.decode(token), None
        except TokenError as e:
            logger.info(f"Rejected auth param: {e}")
            return None, ("invalid auth param", 400)

    def render_playlist(self):
        target_url, error = self.decode_auth()
        if error:
            return error
        return self.handle_playlist(False, target_url)

    def handle_playlist(self, is_master, target_url):
        try:
            content, _ = fetcher.fetch_content(target_url)
        except UpstreamUnavailable as e:
            return f"failed to fetch: {e}", 400

        body = self.rewriter.rewrite(content, target_url, is_master, proxy_origin())
        return Response(body, content_type=MPEGURL, headers=CORS_HEADERS)

    def render_segment(self):
        target_url, error = self.decode_auth()
        if error:
            return error

        try:
            upstream = fetcher.open_content(target_url)
        except UpstreamUnavailable as e:
            return f"failed to fetch: {e}", 500

        headers = dict(CORS_HEADERS)
        for name in PASSTHROUGH_HEADERS:
            value = upstream.headers.get(name)
            if value:
                headers[name] = value

        def generate():
            try:
                # Undecoded bytes so Content-Length and Content-Encoding stay valid
                for chunk in upstream.raw.stream(8192, decode_content=False):
                    if chunk:
                        yield chunk
            finally:
                upstream.close()

        return Response(generate(), headers=headers)
