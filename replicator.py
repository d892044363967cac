# Module orchestrating one capture: fetch, discover, resolve, rewrite

import logging
from urllib.parse import urlparse

import constants # Import constants
from api_clients.cors_client import fetch_page_markup, fetch_asset_bytes
from asset_resolver import resolve_assets
from config_loader import default_config
from exceptions import FetchError, InvalidUrlError, PageFetchError
from html_processor import extract_assets, rewrite_html
from models import CaptureEvent, CaptureResult

logger = logging.getLogger(__name__)


def is_valid_url(url):
    """True when url parses with a scheme and a host (and a numeric port, if any)."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
        parsed.port # Raises ValueError for a malformed port
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc and parsed.hostname)


def _emit(observer, event):
    if observer is None:
        return
    try:
        observer(event)
    except Exception as e:
        # Observers are presentation only; the capture carries on regardless
        logger.error(f"Capture observer failed on stage '{event.stage}': {e}", exc_info=True)


def generate_replica(page_url, config=None, observer=None, fetch_page=None, fetch_asset=None):
    """
    Captures page_url and every image/stylesheet it references.

    The observer, if given, receives CaptureEvent objects in order:
    page_fetch_started, assets_discovered, asset_progress (per download),
    rewriting, then completed or failed.

    Returns:
        CaptureResult
    Raises:
        InvalidUrlError: page_url does not parse; nothing was fetched.
        PageFetchError: the page itself could not be retrieved.
    """
    config = config or default_config()
    fetch_page = fetch_page or fetch_page_markup
    fetch_asset = fetch_asset or fetch_asset_bytes

    if not is_valid_url(page_url):
        error = InvalidUrlError(page_url)
        logger.error(str(error))
        _emit(observer, CaptureEvent(constants.STAGE_FAILED, error=error, message=str(error)))
        raise error
    page_url = page_url.strip()

    logger.info(f"--- Capturing {page_url} ---")
    _emit(observer, CaptureEvent(constants.STAGE_PAGE_FETCH_STARTED, message="Fetching HTML content..."))
    try:
        markup = fetch_page(page_url, config)
    except FetchError as e:
        error = PageFetchError.from_fetch_error(e)
        logger.error(f"Failed to fetch website: {error}")
        _emit(observer, CaptureEvent(constants.STAGE_FAILED, error=error, message=str(error)))
        raise error from e

    assets = extract_assets(markup, page_url)
    total_assets = len(assets['images']) + len(assets['stylesheets'])
    if total_assets == 0:
        message = "No assets found, preparing download..."
    else:
        message = f"Found {total_assets} assets. Downloading..."
    logger.info(message)
    _emit(observer, CaptureEvent(constants.STAGE_ASSETS_DISCOVERED, total=total_assets, message=message))

    def report_progress(downloaded, total):
        _emit(observer, CaptureEvent(constants.STAGE_ASSET_PROGRESS, current=downloaded, total=total,
                                     message=f"Downloaded {downloaded}/{total} assets..."))

    resolution = resolve_assets(assets['images'], assets['stylesheets'], page_url, config,
                                fetch_asset=fetch_asset, on_progress=report_progress)

    _emit(observer, CaptureEvent(constants.STAGE_REWRITING, message="Rewriting HTML paths..."))
    final_markup = rewrite_html(markup, resolution.asset_map, page_url)

    result = CaptureResult(
        page_url=page_url,
        final_markup=final_markup,
        assets=resolution.assets,
        counts=resolution.counts,
        total_bytes=resolution.total_bytes,
        asset_map=resolution.asset_map,
    )
    logger.info(f"Replica generated: {result.counts.images} images, {result.counts.stylesheets} stylesheets, "
                f"{result.total_kilobytes} KB")
    _emit(observer, CaptureEvent(constants.STAGE_COMPLETED, result=result, message="Replica generated successfully!"))
    return result
