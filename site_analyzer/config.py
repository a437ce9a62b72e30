import os
from dotenv import load_dotenv

load_dotenv()

# --------------------------------------------------
# App
# --------------------------------------------------
APP_NAME = "Site Analyzer API"
API_PREFIX = "/api"

ENV = os.getenv("ENV", "local")  # local | production
IS_PROD = ENV == "production"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --------------------------------------------------
# OpenAI (fallback generation only)
# --------------------------------------------------
# Optional: without a key the simulated-crawl fallback is skipped
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
FALLBACK_MODEL = os.getenv("FALLBACK_MODEL", "gpt-4o-mini")
FALLBACK_TEMPERATURE = float(os.getenv("FALLBACK_TEMPERATURE", 0.7))
FALLBACK_TIMEOUT_SEC = float(os.getenv("FALLBACK_TIMEOUT_SEC", 60))

# --------------------------------------------------
# Rendering proxy (JS-rendered / SPA sites)
# --------------------------------------------------
RENDER_PROXY_BASE = os.getenv("RENDER_PROXY_BASE", "https://r.jina.ai")

# --------------------------------------------------
# Crawl budget
# --------------------------------------------------
# Host kills the request at 300s; keep headroom for serialization
HARD_LIMIT_SEC = float(os.getenv("HARD_LIMIT_SEC", 300))
RESPONSE_MARGIN_SEC = float(os.getenv("RESPONSE_MARGIN_SEC", 5))
CRAWL_DEADLINE_SEC = float(os.getenv("CRAWL_DEADLINE_SEC", 280))

MAX_PAGES = int(os.getenv("MAX_PAGES", 50))
BATCH_SIZE = int(os.getenv("BATCH_SIZE", 5))

SITEMAP_TIMEOUT_SEC = float(os.getenv("SITEMAP_TIMEOUT_SEC", 5))
INITIAL_TIMEOUT_SEC = float(os.getenv("INITIAL_TIMEOUT_SEC", 15))
PAGE_TIMEOUT_SEC = float(os.getenv("PAGE_TIMEOUT_SEC", 10))

PAGE_TEXT_LIMIT = int(os.getenv("PAGE_TEXT_LIMIT", 8_000))
PDF_TEXT_LIMIT = int(os.getenv("PDF_TEXT_LIMIT", 10_000))
CORPUS_LIMIT = int(os.getenv("CORPUS_LIMIT", 100_000))

MIN_PAGE_TEXT_LEN = int(os.getenv("MIN_PAGE_TEXT_LEN", 200))
MIN_PDF_TEXT_LEN = int(os.getenv("MIN_PDF_TEXT_LEN", 50))

# --------------------------------------------------
# Quality gate
# --------------------------------------------------
THIN_CONTENT_CHARS = int(os.getenv("THIN_CONTENT_CHARS", 2_000))
FALLBACK_MIN_CHARS = int(os.getenv("FALLBACK_MIN_CHARS", 500))

QUALITY_KEYWORDS = ("services", "about", "contact")

# --------------------------------------------------
# Heuristic tables
# --------------------------------------------------
SITEMAP_PATHS = [
    "sitemap_index.xml",
    "sitemap.xml",
    "properties-sitemap.xml",
    "listings-sitemap.xml",
]

SKIP_EXTENSIONS = (
    ".png", ".jpg", ".jpeg", ".webp", ".gif", ".svg", ".ico",
    ".zip", ".rar", ".7z", ".tar", ".gz",
    ".mp4", ".mov", ".avi", ".mkv", ".webm",
    ".css", ".js",
    ".woff", ".woff2", ".ttf", ".otf", ".eot",
)

# SPA shell = very little visible text + a client-side root element
SPA_MAX_TEXT_LEN = int(os.getenv("SPA_MAX_TEXT_LEN", 500))
SPA_ROOT_MARKERS = [
    'id="root"', "id='root'",
    'id="__next"', "id='__next'",
]

# Checked against single pages (initial fetch + crawled subpages)
BLOCKED_PAGE_MARKERS = [
    "Request unsuccessful",
    "Access Denied",
    "Cloudflare",
]

# Checked against the aggregated corpus
BLOCKED_CORPUS_MARKERS = BLOCKED_PAGE_MARKERS + [
    "Enable JavaScript",
]

# Domain keyword -> extra prompting for the simulated crawl
VERTICAL_HINTS = [
    {
        "name": "fitness",
        "keywords": ("fitness", "gym", "crossfit"),
        "instructions": (
            "CRITICAL: List specific gym equipment (treadmills, squat racks, "
            "free weights, hammer strength machines) found at this type of facility."
        ),
        "page": "/equipment",
        "page_hint": "[Detailed list of likely equipment...]",
    },
]

# --------------------------------------------------
# PDF / OCR
# --------------------------------------------------
OCR_ENABLE = os.getenv("OCR_ENABLE", "false").lower() == "true"
OCR_MIN_TEXT_CHARS = int(os.getenv("OCR_MIN_TEXT_CHARS", 500))
OCR_DPI = int(os.getenv("OCR_DPI", 220))
OCR_LANG = os.getenv("OCR_LANG", "eng")

# 25 MB safety limit per download
MAX_DOWNLOAD_SIZE = 25 * 1024 * 1024
