"""HLS manifest rewriting.

Every reference in a manifest is resolved against the URL the manifest was
fetched from and routed back through the proxy: sub-playlists to the playlist
renderer, segments of media playlists to the segment proxy. Everything else
is left as it was.
"""
import enum
import posixpath
import re
from urllib.parse import urljoin, urlparse, urlencode

# Tags carrying a URI="..." attribute that has to be proxied
URI_ATTRIBUTE_TAGS = ('#EXT-X-MAP', '#EXT-X-MEDIA')
URI_ATTRIBUTE = re.compile(r'URI="([^"]+)"')

SEGMENT_EXTENSIONS = ('.ts', '.mp4')


class LineKind(enum.Enum):
    BLANK = 'blank'
    COMMENT = 'comment'
    URI_DIRECTIVE = 'uri_directive'
    URI = 'uri'


def classify_line(line):
    trimmed = line.strip()
    if not trimmed:
        return LineKind.BLANK
    if trimmed.startswith(URI_ATTRIBUTE_TAGS):
        return LineKind.URI_DIRECTIVE
    if trimmed.startswith('#'):
        return LineKind.COMMENT
    return LineKind.URI


def resolve_reference(reference, base_url):
    """Absolute form of reference, or None if it cannot be parsed."""
    try:
        return urljoin(base_url, reference)
    except ValueError:
        return None


def path_extension(url):
    return posixpath.splitext(urlparse(url).path)[1].lower()


class ManifestRewriter:

    def __init__(self, codec, provider):
        self.codec = codec
        self.provider = provider

    def render_url(self, proxy_origin, name, token):
        query = urlencode({'auth': token})
        return f"{proxy_origin}/{self.provider}/render/{name}?{query}"

    def rewrite_reference(self, reference, base_url, is_master, proxy_origin):
        abs_url = resolve_reference(reference, base_url)
        if abs_url is None:
            return reference

        extension = path_extension(abs_url)
        if extension == '.m3u8':
            return self.render_url(proxy_origin, 'playlist.m3u8', self.codec.encode(abs_url))
        if extension in SEGMENT_EXTENSIONS and not is_master:
            # Only media playlists list segments
            return self.render_url(proxy_origin, f"segment{extension}", self.codec.encode(abs_url))
        return abs_url

    def rewrite_directive(self, line, base_url, is_master, proxy_origin):
        match = URI_ATTRIBUTE.search(line)
        if not match:
            return line
        new_uri = self.rewrite_reference(match.group(1), base_url, is_master, proxy_origin)
        return line[:match.start(1)] + new_uri + line[match.end(1):]

    def rewrite_line(self, line, base_url, is_master, proxy_origin):
        kind = classify_line(line)
        if kind is LineKind.URI_DIRECTIVE:
            return self.rewrite_directive(line, base_url, is_master, proxy_origin)
        if kind is LineKind.URI:
            return self.rewrite_reference(line.strip(), base_url, is_master, proxy_origin)
        return line

    def rewrite(self, body, base_url, is_master, proxy_origin):
        if isinstance(body, bytes):
            body = body.decode('utf-8', errors='replace')
        # Lines are \n delimited only; a CR from CRLF endings is dropped
        return "\n".join(
            self.rewrite_line(line[:-1] if line.endswith('\r') else line, base_url, is_master, proxy_origin)
            for line in body.split('\n')
        )
