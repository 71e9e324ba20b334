import logging

import requests

from tvgate import config
from tvgate.errors import UpstreamUnavailable, UpstreamStatusError

logger = logging.getLogger(__name__)


def open_content(url, user_agent=None, stream=True):
    """Issues a single GET against the provider and returns the open response.

    The caller owns the response and must close it. Non-2xx responses raise
    UpstreamStatusError, transport failures and timeouts raise UpstreamUnavailable.
    """
    headers = {'User-Agent': user_agent or config.PLAYER_USER_AGENT}
    try:
        response = requests.get(
            url,
            headers=headers,
            stream=stream,
            allow_redirects=True,
            timeout=config.REQUEST_TIMEOUT,
            proxies=config.get_proxy(),
            verify=config.VERIFY_SSL
        )
    except requests.RequestException as e:
        logger.warning(f"Upstream request failed for {url}: {e}")
        raise UpstreamUnavailable(f"error fetching {url}: {e}") from e

    if not 200 <= response.status_code < 300:
        response.close()
        logger.warning(f"Upstream returned status {response.status_code} for {url}")
        raise UpstreamStatusError(response.status_code, url)
    return response


def fetch_content(url, user_agent=None):
    """Fetches url and returns (body, headers)."""
    response = open_content(url, user_agent, stream=False)
    try:
        return response.content, response.headers
    except requests.RequestException as e:
        raise UpstreamUnavailable(f"error reading {url}: {e}") from e
    finally:
        response.close()
