class TVGateError(Exception):
    """Base class for every error raised by tvgate."""


class UpstreamUnavailable(TVGateError):
    """Transport failure or non-success status while talking to the provider."""


class UpstreamStatusError(UpstreamUnavailable):
    def __init__(self, status_code, url=None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"upstream returned status {status_code}")


class ScrapeError(TVGateError):
    """The provider changed the shape of a page or API response."""


class TokenNotFound(ScrapeError):
    pass


class TokenFieldMissing(ScrapeError):
    pass


class CookieNotFound(ScrapeError):
    pass


class TokenError(TVGateError):
    """A client supplied auth token could not be turned back into a URL."""


class MalformedToken(TokenError):
    pass


class DecodeFailure(TokenError):
    pass
