"""Local configuration for the wiki2term retrieval layer."""

from __future__ import annotations

import os


DEFAULT_BASE_URL = "https://en.wikipedia.org"
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "wiki2term/0.1 (+https://github.com/wiki2term/wiki2term)"

# Base URL of the MediaWiki instance; the API lives at {base}/w/api.php.
WIKI2TERM_BASE_URL = os.getenv("WIKI2TERM_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
WIKI2TERM_FETCH_TIMEOUT_S = float(os.getenv("WIKI2TERM_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
WIKI2TERM_FETCH_MAX_RETRIES = int(os.getenv("WIKI2TERM_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
WIKI2TERM_FETCH_BACKOFF_S = float(os.getenv("WIKI2TERM_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
WIKI2TERM_USER_AGENT = os.getenv("WIKI2TERM_USER_AGENT", DEFAULT_USER_AGENT)
