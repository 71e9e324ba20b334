"""Zee5 guest session cookie exchange.

The provider hands out an ``hdntl`` cookie only at the end of a chain of
scraped tokens. Each extraction lives in its own function so a change in the
shape of a page or API response breaks exactly one of them.
"""
import base64
import json
import logging
import re
import uuid

import requests

from tvgate import config
from tvgate.credential_cache import fingerprint
from tvgate.errors import (
    UpstreamUnavailable, UpstreamStatusError, TokenNotFound, TokenFieldMissing, CookieNotFound
)

logger = logging.getLogger(__name__)

PLATFORM_PAGE_URL = 'https://www.zee5.com/live-tv/aaj-tak/0-9-aajtak'
PLAYBACK_API_URL = 'https://spapi.zee5.com/singlePlayback/getDetails/secure'
ORIGIN = 'https://www.zee5.com'

PLAYBACK_PARAMS = {
    'channel_id': '0-9-9z583538',
    'platform_name': 'desktop_web',
    'translation': 'en',
    'user_language': 'en,hi,te',
    'country': 'IN',
    'state': '',
    'app_version': '4.24.0',
    'user_type': 'guest',
    'check_parental_control': 'false',
}

DEVICE_CAPABILITIES = {
    "schema_version": "1",
    "os_name": "N/A",
    "os_version": "N/A",
    "platform_name": "Chrome",
    "platform_version": "104",
    "device_name": "",
    "app_name": "Web",
    "app_version": "2.52.31",
    "player_capabilities": {
        "audio_channel": ["STEREO"],
        "video_codec": ["H264"],
        "container": ["MP4", "TS"],
        "package": ["DASH", "HLS"],
        "resolution": ["240p", "SD", "HD", "FHD"],
        "dynamic_range": ["SDR"],
    },
    "security_capabilities": {
        "encryption": ["WIDEVINE_AES_CTR"],
        "widevine_security_level": ["L3"],
        "hdcp_version": ["HDCP_V1", "HDCP_V2", "HDCP_V2_1", "HDCP_V2_2"],
    },
}

PLATFORM_TOKEN_RE = re.compile(r'"gwapiPlatformToken"\s*:\s*"([^"]+)"')
HDNTL_RE = re.compile(r'hdntl=([^\s"]+)')


def generate_guest_token():
    return str(uuid.uuid4())


def generate_dd_token():
    """Base64 encoded device capability descriptor sent as 'x-dd-token'."""
    payload = json.dumps(DEVICE_CAPABILITIES, sort_keys=True, separators=(',', ':'))
    return base64.b64encode(payload.encode('utf-8')).decode('ascii')


def extract_platform_token(html):
    match = PLATFORM_TOKEN_RE.search(html)
    if not match:
        raise TokenNotFound("platform token not found in page")
    return match.group(1)


def extract_video_token(payload):
    """Reads keyOsDetails.video_token from a playback API response."""
    key_os_details = payload.get('keyOsDetails') if isinstance(payload, dict) else None
    if not isinstance(key_os_details, dict):
        raise TokenFieldMissing("could not fetch m3u8 URL (keyOsDetails missing)")

    video_token = key_os_details.get('video_token')
    if not isinstance(video_token, str) or not video_token:
        raise TokenFieldMissing("could not fetch m3u8 URL (video_token missing)")
    if not video_token.startswith(('http://', 'https://')):
        raise TokenFieldMissing("invalid video_token url")
    return video_token


def extract_hdntl_cookie(body):
    match = HDNTL_RE.search(body)
    if not match:
        raise CookieNotFound("hdntl token not found in response")
    return match.group(0)


def _check_status(response):
    if not 200 <= response.status_code < 300:
        raise UpstreamStatusError(response.status_code, response.url)


def fetch_platform_token(user_agent):
    try:
        response = requests.get(
            PLATFORM_PAGE_URL,
            headers={'User-Agent': user_agent},
            timeout=config.REQUEST_TIMEOUT,
            proxies=config.get_proxy(),
            verify=config.VERIFY_SSL
        )
    except requests.RequestException as e:
        raise UpstreamUnavailable(f"error fetching page: {e}") from e
    _check_status(response)
    return extract_platform_token(response.text)


def fetch_m3u8_url(guest_token, platform_token, dd_token, user_agent):
    params = dict(PLAYBACK_PARAMS, device_id=guest_token)
    payload = {
        'x-access-token': platform_token,
        'X-Z5-Guest-Token': guest_token,
        'x-dd-token': dd_token,
    }
    headers = {
        'accept': 'application/json',
        'content-type': 'application/json',
        'origin': ORIGIN,
        'referer': ORIGIN + '/',
        'user-agent': user_agent,
    }
    try:
        response = requests.post(
            PLAYBACK_API_URL,
            params=params,
            json=payload,
            headers=headers,
            timeout=config.REQUEST_TIMEOUT,
            proxies=config.get_proxy(),
            verify=config.VERIFY_SSL
        )
    except requests.RequestException as e:
        raise UpstreamUnavailable(f"playback request failed: {e}") from e
    _check_status(response)

    try:
        data = response.json()
    except ValueError as e:
        raise TokenFieldMissing(f"playback API returned invalid JSON: {e}") from e
    return extract_video_token(data)


def fetch_cookie(m3u8_url, user_agent):
    try:
        response = requests.get(
            m3u8_url,
            headers={'User-Agent': user_agent},
            allow_redirects=True,
            timeout=config.REQUEST_TIMEOUT,
            proxies=config.get_proxy(),
            verify=config.VERIFY_SSL
        )
    except requests.RequestException as e:
        raise UpstreamUnavailable(f"error fetching M3U8 content: {e}") from e
    _check_status(response)
    return extract_hdntl_cookie(response.text)


def generate_cookie(user_agent, cache):
    """Runs the whole exchange and stores the resulting cookie in cache.

    Any failing step raises and leaves the cache untouched.
    """
    logger.info("Generating a new Zee5 session cookie")
    guest_token = generate_guest_token()
    platform_token = fetch_platform_token(user_agent)
    logger.debug("Zee5 platform token obtained")
    dd_token = generate_dd_token()
    m3u8_url = fetch_m3u8_url(guest_token, platform_token, dd_token, user_agent)
    logger.debug(f"Zee5 playback URL obtained: {m3u8_url}")
    cookie = fetch_cookie(m3u8_url, user_agent)

    cache.put(fingerprint(user_agent), cookie)
    logger.info("Zee5 session cookie cached")
    return cookie
