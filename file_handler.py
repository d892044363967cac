# Module for packaging a capture into a ZIP archive and saving it

import io
import os
import logging
import zipfile
from urllib.parse import urlparse
import constants # Import constants

logger = logging.getLogger(__name__)


# --- Packaging ---
def archive_entries(capture_result):
    """
    Returns the ordered {archive path: bytes} mapping for a capture.
    Assets come in download order; a later asset with the same path replaces
    the earlier one. index.html holds the rewritten markup as UTF-8.
    """
    entries = {}
    for asset in capture_result.assets:
        if asset.local_path in entries:
            logger.warning(f"Archive path {asset.local_path} is used twice; keeping the payload of {asset.original_reference}")
        entries[asset.local_path] = asset.payload
    entries[constants.INDEX_FILENAME] = capture_result.final_markup.encode('utf-8')
    return entries


def build_archive(capture_result):
    """Compresses the capture into an in-memory ZIP and returns its bytes."""
    entries = archive_entries(capture_result)
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as z:
        for name, payload in entries.items():
            z.writestr(name, payload)
    logger.debug(f"Built archive with {len(entries)} entries ({buf.tell()} bytes)")
    return buf.getvalue()


# --- Saving ---
def archive_filename(page_url):
    """<hostname>-replica.zip for the captured page."""
    hostname = urlparse(page_url).hostname
    if ":" in hostname:
        hostname = f"[{hostname}]" # IPv6 literals keep their brackets
    return constants.ARCHIVE_FILENAME_TEMPLATE.format(hostname)


def save_archive(archive_bytes, page_url, output_dir=constants.DEFAULT_OUTPUT_DIR):
    """Writes the archive into output_dir and returns the full path. An existing file is replaced."""
    os.makedirs(output_dir, exist_ok=True)
    full_path = os.path.join(output_dir, archive_filename(page_url))
    with open(full_path, 'wb') as f:
        f.write(archive_bytes)
    logger.info(f"Successfully saved archive: {full_path}")
    return full_path
