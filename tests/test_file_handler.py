import pytest
import io
import os
import zipfile
import logging

import file_handler
import constants
from models import AssetCounts, CaptureResult, ResolvedAsset


def _asset(reference, local_path, payload, kind=constants.ASSET_KIND_IMAGE):
    return ResolvedAsset(
        original_reference=reference,
        absolute_url=f"https://ex.test/{reference}",
        payload=payload,
        byte_size=len(payload),
        local_path=local_path,
        kind=kind,
    )


@pytest.fixture
def capture_result():
    assets = (
        _asset("p.jpg", "images/p.jpg", b"jpeg-bytes"),
        _asset("s.css", "styles/s.css", b"body{color:red}", constants.ASSET_KIND_STYLESHEET),
    )
    return CaptureResult(
        page_url="https://ex.test/",
        final_markup='<html><body><img src="images/p.jpg"/> café</body></html>',
        assets=assets,
        counts=AssetCounts(images=1, stylesheets=1),
        total_bytes=sum(a.byte_size for a in assets),
        asset_map={"p.jpg": "images/p.jpg", "s.css": "styles/s.css"},
    )


# --- Tests for archive_entries ---

def test_archive_entries(capture_result):
    entries = file_handler.archive_entries(capture_result)

    assert list(entries) == ["images/p.jpg", "styles/s.css", constants.INDEX_FILENAME]
    assert entries["images/p.jpg"] == b"jpeg-bytes"
    assert entries[constants.INDEX_FILENAME] == capture_result.final_markup.encode('utf-8')


def test_archive_entries_later_asset_replaces_same_path(caplog):
    result = CaptureResult(
        page_url="https://ex.test/",
        final_markup="<html></html>",
        assets=(_asset("a/logo.png", "images/logo.png", b"first"),
                _asset("b/logo.png", "images/logo.png", b"second")),
        counts=AssetCounts(images=2),
        total_bytes=11,
    )

    with caplog.at_level(logging.WARNING):
        entries = file_handler.archive_entries(result)

    assert entries["images/logo.png"] == b"second"
    assert len(entries) == 2
    assert "Archive path images/logo.png is used twice" in caplog.text


def test_archive_entries_no_assets():
    result = CaptureResult(page_url="https://ex.test/", final_markup="<p>x</p>", assets=(),
                           counts=AssetCounts(), total_bytes=0)
    assert file_handler.archive_entries(result) == {constants.INDEX_FILENAME: b"<p>x</p>"}


# --- Tests for build_archive ---

def test_build_archive_is_readable_zip(capture_result):
    archive_bytes = file_handler.build_archive(capture_result)

    with zipfile.ZipFile(io.BytesIO(archive_bytes)) as z:
        assert sorted(z.namelist()) == ["images/p.jpg", "index.html", "styles/s.css"]
        assert z.read("styles/s.css") == b"body{color:red}"
        assert z.read("index.html").decode('utf-8') == capture_result.final_markup
        assert z.getinfo("images/p.jpg").compress_type == zipfile.ZIP_DEFLATED


# --- Tests for archive_filename / save_archive ---

@pytest.mark.parametrize("page_url, expected", [
    ("https://ex.test/", "ex.test-replica.zip"),
    ("https://www.Example.com:8443/path/page.html?q=1", "www.example.com-replica.zip"),
    ("http://localhost/", "localhost-replica.zip"),
    ("http://[::1]:8080/", "[::1]-replica.zip"),
])
def test_archive_filename(page_url, expected):
    assert file_handler.archive_filename(page_url) == expected


def test_save_archive_creates_directory(tmp_path):
    output_dir = tmp_path / "nested" / "out"

    saved_path = file_handler.save_archive(b"PK-data", "https://ex.test/page", str(output_dir))

    assert saved_path == os.path.join(str(output_dir), "ex.test-replica.zip")
    with open(saved_path, 'rb') as f:
        assert f.read() == b"PK-data"


def test_save_archive_replaces_existing_file(tmp_path):
    file_handler.save_archive(b"old", "https://ex.test/", str(tmp_path))
    saved_path = file_handler.save_archive(b"new", "https://ex.test/", str(tmp_path))
    with open(saved_path, 'rb') as f:
        assert f.read() == b"new"
