# Module for fetching pages and assets, falling back to a CORS relay

import logging
from urllib.parse import quote

import requests

import constants # Import constants
from exceptions import FetchError
from .decorators import raise_fetch_error # Import the decorator

logger = logging.getLogger(__name__)


def build_relay_url(url, config=None):
    """Returns the relay address that retrieves `url` on our behalf."""
    template = (config or {}).get('relay_url_template', constants.RELAY_URL_TEMPLATE)
    return template.format(quote(url, safe=constants.RELAY_QUOTE_SAFE))


def _get(url, config):
    headers = {'User-Agent': config.get('user_agent', constants.DEFAULT_USER_AGENT)}
    timeout = config.get('request_timeout_seconds', constants.DEFAULT_TIMEOUT)
    return requests.get(url, headers=headers, timeout=timeout)


def _fetch_direct(url, config):
    """Single direct attempt. Returns the response on success, None otherwise."""
    logger.debug(f"Attempting direct fetch: {url}")
    try:
        response = _get(url, config)
    except requests.exceptions.RequestException as e:
        logger.warning(f"Direct fetch failed for {url}: {e}. Trying relay...")
        return None

    if response.ok:
        return response

    logger.warning(f"Direct fetch for {url} returned status {response.status_code}. Trying relay...")
    response.close()
    return None


@raise_fetch_error
def _fetch_via_relay(url, config):
    """Single attempt through the relay. Raises FetchError on any failure."""
    relay_url = build_relay_url(url, config)
    logger.debug(f"Attempting relay fetch: {relay_url}")
    response = _get(relay_url, config)
    if not response.ok:
        status, reason = response.status_code, response.reason
        response.close()
        raise FetchError(url, status=status, reason=reason)
    return response


def fetch_with_fallback(url, config=None):
    """
    Fetches `url` directly, then once through the relay if the direct
    attempt raised a network error or returned a non-success status.
    Returns the successful requests.Response; raises FetchError when both fail.
    """
    config = config or {}
    response = _fetch_direct(url, config)
    if response is None:
        response = _fetch_via_relay(url, config)
    logger.debug(f"Fetched {url} (status {response.status_code})")
    return response


def fetch_page_markup(url, config=None):
    """Fetches the page and returns its markup as text."""
    response = fetch_with_fallback(url, config)
    try:
        # Servers that declare no charset get UTF-8 instead of requests' ISO-8859-1 default
        content_type = response.headers.get('Content-Type', '')
        if 'charset' not in content_type.lower():
            response.encoding = 'utf-8'
        return response.text
    finally:
        response.close()


def fetch_asset_bytes(url, config=None):
    """Fetches an asset and returns its raw bytes."""
    response = fetch_with_fallback(url, config)
    try:
        return response.content
    finally:
        response.close()
