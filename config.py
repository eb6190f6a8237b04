"""
Central configuration for the JSON translation tool.

Secrets and per-run values come from the environment (a .env file in the
working directory is loaded automatically):

    DEEPL_API_KEY   – DeepL authentication key (required for the deepl backend)
    TARGET_LANG     – target language code, e.g. "DE", "FR" (required)
    DEEPL_API_URL   – optional DeepL endpoint override
    OPENAI_API_KEY  – required only for the openai backend

Everything below is a default that the matching command-line flag overrides.
"""

# ── Backend ────────────────────────────────────────────────────────────────────
# "deepl"  → DeepL REST API
# "openai" → chat-completion model acting as a translator
BACKEND = "deepl"

# DeepL keys ending in ":fx" belong to the free plan and use the free host.
DEEPL_FREE_API_URL = "https://api-free.deepl.com/v2/translate"
DEEPL_PRO_API_URL  = "https://api.deepl.com/v2/translate"

MODEL = "gpt-4o-mini"          # only used by the openai backend
TEMPERATURE = 0.2

# ── Network ────────────────────────────────────────────────────────────────────
REQUEST_TIMEOUT = 30           # seconds per HTTP request
MAX_ATTEMPTS = 4               # tries per text for transient failures (429/5xx/network)

# ── Paths ──────────────────────────────────────────────────────────────────────
DATA_DIR   = "data"
INPUT_FILE = "data/input.json"
# None → data/<unix-timestamp>_<TARGET_LANG>.json
OUTPUT_FILE: str | None = None
# None → data/cache_<TARGET_LANG>.json
CACHE_FILE: str | None = None
