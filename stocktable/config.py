"""Application configuration: storage backend, logging, display settings."""

import os

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

load_dotenv(os.path.join(BASE_DIR, ".env"))
load_dotenv(os.path.join(BASE_DIR, ".env.local"))

APP_TITLE = "Portfolio Insights"
APP_DESCRIPTION = "Analyze stock performance with advanced sorting and filtering."

# ── Storage ─────────────────────────────────────────────────────────────────
STORE_BACKEND = os.getenv("STOCKTABLE_STORE", "file").strip().lower()
DATA_FILE = os.getenv("STOCKTABLE_DATA_FILE", os.path.join(BASE_DIR, "data", "portfolio.json"))
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_KEY = os.getenv("STOCKTABLE_REDIS_KEY", "portfolio:data")

# ── Logging ─────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("STOCKTABLE_LOG_LEVEL", "INFO")

# ── Table columns ───────────────────────────────────────────────────────────
PERF_COLUMNS = [
    ("return_1d", "1D %"),
    ("return_1w", "1W %"),
    ("return_1m", "1M %"),
    ("return_3m", "3M %"),
    ("return_6m", "6M %"),
    ("return_1y", "1Y %"),
]

TOGGLEABLE_COLUMNS = [
    ("industry", "Industry"),
    ("current_price", "Price"),
    *PERF_COLUMNS,
]

# ── Heatmap colors for period returns ───────────────────────────────────────
# Checked top to bottom: (predicate threshold, css color)
PERF_COLORS = {
    "positive": [
        (5, "var(--positive-color-strong)"),
        (2, "var(--positive-color-medium)"),
        (0, "var(--positive-color-weak)"),
    ],
    "negative": [
        (-5, "var(--negative-color-strong)"),
        (-2, "var(--negative-color-medium)"),
        (0, "var(--negative-color-weak)"),
    ],
    "neutral": "transparent",
}

# ── External links ──────────────────────────────────────────────────────────
COMPANY_URL = "https://www.screener.in/company/{code}/"
