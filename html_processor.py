# Module for HTML parsing, asset discovery, and reference rewriting

import logging
import re

from bs4 import BeautifulSoup
import constants # Import constants

# Set up a specific logger for this module
logger = logging.getLogger(__name__)

# One match per url(...) token; quotes optional, token case-insensitive
CSS_URL_RE = re.compile(r"""url\(['"]?([^'")\s]+)['"]?\)""", re.IGNORECASE)


# --- Element Selection (shared by discovery and rewriting) ---
def _parse(markup):
    return BeautifulSoup(markup or '', 'html.parser')

def _is_data_url(value):
    return value.strip().lower().startswith(constants.DATA_URL_PREFIX)

def _image_tags(soup):
    """<img> elements carrying a src attribute, in document order."""
    return soup.find_all('img', src=True)

def _stylesheet_tags(soup):
    """<link rel="stylesheet"> elements carrying an href, in document order."""
    links = []
    for link_tag in soup.find_all('link', href=True):
        rel = link_tag.get('rel') or []
        # bs4 splits rel into a list of tokens; require the single token "stylesheet"
        if isinstance(rel, str):
            rel = rel.split()
        if [token.lower() for token in rel] == [constants.STYLESHEET_REL]:
            links.append(link_tag)
    return links

def _style_text(style_tag):
    return style_tag.string or ''


# --- Asset Discovery ---
def find_css_urls(css_text):
    """Returns every non-data url(...) value in a block of stylesheet text, in order."""
    found = []
    for match in CSS_URL_RE.finditer(css_text or ''):
        value = match.group(1)
        if value and not _is_data_url(value):
            found.append(value)
    return found


def extract_assets(markup, page_url):
    """
    Finds image and stylesheet references in page markup.

    Returns:
        dict: {'images': [...], 'stylesheets': [...]} holding the references
        exactly as written. Images from <img> come first in document order,
        followed by url(...) references from inline <style> blocks.
        Duplicates are kept.
    """
    soup = _parse(markup)
    images = []
    stylesheets = []

    for img_tag in _image_tags(soup):
        src = img_tag['src']
        if src and not _is_data_url(src):
            images.append(src)

    for link_tag in _stylesheet_tags(soup):
        href = link_tag['href']
        if href:
            stylesheets.append(href)

    inline_count = 0
    for style_tag in soup.find_all('style'):
        css_urls = find_css_urls(_style_text(style_tag))
        inline_count += len(css_urls)
        images.extend(css_urls)

    logger.debug(f"Discovered {len(images)} image references ({inline_count} from inline styles) "
                 f"and {len(stylesheets)} stylesheets for {page_url}")
    return {'images': images, 'stylesheets': stylesheets}


# --- Reference Rewriting ---
def _rewrite_css_text(css_text, asset_map):
    """Replaces url(<key>) for every mapped key with url('<local path>')."""
    for original_url, local_path in asset_map.items():
        # Only the url token ignores case; the key must match exactly
        pattern = re.compile(r"""(?i:url)\(['"]?""" + re.escape(original_url) + r"""['"]?\)""")
        replacement = f"url('{local_path}')"
        # Callable replacement so backslashes in the path are inserted literally
        css_text = pattern.sub(lambda _match: replacement, css_text)
    return css_text


def rewrite_html(markup, asset_map, page_url):
    """
    Re-parses the original markup and points every mapped reference at its
    archive path. References without a mapping are left untouched.
    Returns the serialized document.
    """
    soup = _parse(markup)
    rewrite_count = 0

    for img_tag in _image_tags(soup):
        src = img_tag['src']
        if src in asset_map:
            img_tag['src'] = asset_map[src]
            rewrite_count += 1

    for link_tag in _stylesheet_tags(soup):
        href = link_tag['href']
        if href in asset_map:
            link_tag['href'] = asset_map[href]
            rewrite_count += 1

    if asset_map:
        for style_tag in soup.find_all('style'):
            css_text = _style_text(style_tag)
            rewritten = _rewrite_css_text(css_text, asset_map)
            if rewritten != css_text:
                style_tag.string = rewritten
                rewrite_count += 1

    logger.info(f"Rewrote {rewrite_count} asset references for {page_url}")
    return str(soup)
