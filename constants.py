# constants.py - Define constants used throughout the application

# --- Relay Endpoint ---
# Target URL is percent-encoded into the single placeholder
RELAY_URL_TEMPLATE = "https://api.allorigins.win/raw?url={}"
RELAY_QUOTE_SAFE = "-_.!~*'()" # Same unreserved set as encodeURIComponent

# --- Archive Layout ---
INDEX_FILENAME = "index.html"
IMAGES_DIR_NAME = "images"
STYLES_DIR_NAME = "styles"
IMAGE_FALLBACK_TEMPLATE = "image_{}.jpg" # Filled with the running download count
STYLE_FALLBACK_TEMPLATE = "style_{}.css"
ARCHIVE_FILENAME_TEMPLATE = "{}-replica.zip" # Filled with the page hostname

# --- Asset Kinds ---
ASSET_KIND_IMAGE = "image"
ASSET_KIND_STYLESHEET = "stylesheet"

# --- File/Directory Names ---
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_LOG_FILE = None # Console only unless configured
DEFAULT_LOG_LEVEL = "INFO"

# --- Request Defaults ---
DEFAULT_USER_AGENT = "WebsiteReplicator/1.0"
DEFAULT_TIMEOUT = None # No timeout: a hung request stalls the capture

# --- Capture Stages ---
STAGE_PAGE_FETCH_STARTED = "page_fetch_started"
STAGE_ASSETS_DISCOVERED = "assets_discovered"
STAGE_ASSET_PROGRESS = "asset_progress"
STAGE_REWRITING = "rewriting"
STAGE_COMPLETED = "completed"
STAGE_FAILED = "failed"

# --- Other ---
DATA_URL_PREFIX = "data:"
STYLESHEET_REL = "stylesheet"
