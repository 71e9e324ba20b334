import os
import logging
import random
import secrets
from dotenv import load_dotenv

load_dotenv()

# --- Logging ---
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# --- General Configuration ---
# Set the VERIFY_SSL environment variable to "False" or "0" to disable certificate verification.
VERIFY_SSL = os.environ.get('VERIFY_SSL', 'true').lower() not in ('false', '0', 'no')
if not VERIFY_SSL:
    logger.warning("SSL certificate verification is DISABLED. This may expose you to security risks.")
    import urllib3
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

# Timeout in seconds applied to every outbound HTTP call.
REQUEST_TIMEOUT = int(os.environ.get('REQUEST_TIMEOUT', 15))

PORT = int(os.environ.get('PORT', 7860))

# Comma separated list of enabled providers.
PLUGINS = [p.strip() for p in os.environ.get('PLUGINS', 'zee5').split(',') if p.strip()]

# Secret for the auth tokens handed to clients. Without it tokens only decode
# inside the process that issued them.
URL_SECRET = os.environ.get('URL_SECRET', '').strip()
if not URL_SECRET:
    URL_SECRET = secrets.token_hex(32)
    logger.info("URL_SECRET not set, generated a per-process secret.")

# --- Credential cache ---
CREDENTIAL_CACHE_SIZE = int(os.environ.get('CREDENTIAL_CACHE_SIZE', 50))
CREDENTIAL_CACHE_TTL = int(os.environ.get('CREDENTIAL_CACHE_TTL', 3600))

# --- Upstream identities ---
ZEE5_USER_AGENT = os.environ.get(
    'ZEE5_USER_AGENT',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/136.0.0.0 Safari/537.36'
)
PLAYER_USER_AGENT = os.environ.get('PLAYER_USER_AGENT', 'plaYtv/7.1.5 (Linux;Android 13) ExoPlayerLib/2.11.6')

# --- Proxy Configuration ---
PROXY_LIST = []

def setup_proxies():
    """Loads the list of SOCKS5, HTTP and HTTPS proxies from environment variables."""
    global PROXY_LIST
    proxies_found = []

    socks_proxy_list_str = os.environ.get('SOCKS5_PROXY')
    if socks_proxy_list_str:
        raw_socks_list = [p.strip() for p in socks_proxy_list_str.split(',') if p.strip()]
        for proxy in raw_socks_list:
            # socks5h resolves DNS on the proxy side
            final_proxy_url = proxy
            if proxy.startswith('socks5://'):
                final_proxy_url = 'socks5h' + proxy[len('socks5'):]
            elif not proxy.startswith('socks5h://'):
                logger.warning(f"SOCKS5 proxy URL is not in socks5:// or socks5h:// format: {proxy}")
            proxies_found.append(final_proxy_url)
        if raw_socks_list:
            logger.info(f"Found {len(raw_socks_list)} SOCKS5 proxies. Make sure PySocks is installed.")

    for env_name in ('HTTP_PROXY', 'HTTPS_PROXY'):
        proxy_list_str = os.environ.get(env_name)
        if proxy_list_str:
            found = [p.strip() for p in proxy_list_str.split(',') if p.strip()]
            if found:
                logger.info(f"Found {len(found)} proxies in {env_name}.")
                proxies_found.extend(found)

    PROXY_LIST = proxies_found

    if PROXY_LIST:
        logger.info(f"Total of {len(PROXY_LIST)} proxies configured. They will be used on a rotating basis.")
    else:
        logger.debug("No proxy (SOCKS5, HTTP, HTTPS) configured.")

def get_proxy():
    """Selects a random proxy from the list.

    Returns the proxy dictionary for the requests library, or None.
    """
    if not PROXY_LIST:
        return None

    chosen_proxy = random.choice(PROXY_LIST)
    return {'http': chosen_proxy, 'https': chosen_proxy}

setup_proxies()
