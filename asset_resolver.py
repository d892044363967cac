# Module for downloading discovered assets and assigning archive paths

import logging
from urllib.parse import urljoin

import constants # Import constants
from api_clients.cors_client import fetch_asset_bytes
from exceptions import FetchError
from models import AssetCounts, ResolutionResult, ResolvedAsset

logger = logging.getLogger(__name__)


def local_filename(reference, kind, downloaded_count):
    """
    Derives the archive file name for a reference: the text after its last '/'.
    Falls back to image_<N>.jpg / style_<N>.css, N being the number of assets
    downloaded so far across both kinds.
    """
    filename = reference.split('/')[-1]
    if filename:
        return filename
    if kind == constants.ASSET_KIND_IMAGE:
        return constants.IMAGE_FALLBACK_TEMPLATE.format(downloaded_count)
    return constants.STYLE_FALLBACK_TEMPLATE.format(downloaded_count)


def local_path(reference, kind, downloaded_count):
    """Archive-relative path, namespaced by asset kind."""
    directory = constants.IMAGES_DIR_NAME if kind == constants.ASSET_KIND_IMAGE else constants.STYLES_DIR_NAME
    return f"{directory}/{local_filename(reference, kind, downloaded_count)}"


def resolve_assets(images, stylesheets, page_url, config=None, fetch_asset=None, on_progress=None):
    """
    Downloads every reference, images first then stylesheets, one at a time.

    A reference that cannot be fetched is logged and skipped: it gets no map
    entry and no archive file. The map is keyed by the reference exactly as
    written, so two spellings of one URL yield two entries.

    Args:
        fetch_asset: callable(url, config) -> bytes; defaults to the relay-backed fetcher.
        on_progress: optional callable(downloaded, total) invoked after each success.

    Returns:
        ResolutionResult whose counts are the discovered (not downloaded) counts.
    """
    fetch_asset = fetch_asset or fetch_asset_bytes
    total_assets = len(images) + len(stylesheets)
    asset_map = {}
    resolved = []
    total_bytes = 0
    downloaded_count = 0
    failed_count = 0

    passes = ((constants.ASSET_KIND_IMAGE, images), (constants.ASSET_KIND_STYLESHEET, stylesheets))
    for kind, references in passes:
        for reference in references:
            try:
                absolute_url = urljoin(page_url, reference.strip())
                payload = fetch_asset(absolute_url, config)
            except (FetchError, ValueError) as e:
                # ValueError: the reference is not a parseable URL
                failed_count += 1
                logger.warning(f"Failed to download asset: {reference} ({e})")
                continue

            path = local_path(reference, kind, downloaded_count)
            if path in asset_map.values():
                logger.debug(f"Archive path {path} already assigned; the later download replaces it")
            asset_map[reference] = path
            resolved.append(ResolvedAsset(
                original_reference=reference,
                absolute_url=absolute_url,
                payload=payload,
                byte_size=len(payload),
                local_path=path,
                kind=kind,
            ))
            total_bytes += len(payload)
            downloaded_count += 1
            logger.info(f"Downloaded {downloaded_count}/{total_assets} assets...")
            if on_progress:
                on_progress(downloaded_count, total_assets)

    logger.info(f"Asset summary for {page_url}: Found={total_assets}, Downloaded={downloaded_count}, "
                f"Failed={failed_count}, Bytes={total_bytes}")
    return ResolutionResult(
        asset_map=asset_map,
        assets=tuple(resolved),
        counts=AssetCounts(images=len(images), stylesheets=len(stylesheets)),
        total_bytes=total_bytes,
    )
