"""FastAPI application factory."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from stocktable import config
from stocktable.logging_setup import setup_logging
from stocktable.services.portfolio_service import get_portfolio_service

BASE_DIR = Path(__file__).resolve().parent

setup_logging(config.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the stored portfolio before serving requests."""
    get_portfolio_service().load()
    yield


app = FastAPI(title=config.APP_TITLE, lifespan=lifespan)
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=BASE_DIR / "templates")


# ── Jinja2 global context ────────────────────────────────────────────────────
def _fmt(value, decimals=2, fallback="N/A"):
    """Format a numeric value for display."""
    if value is None:
        return fallback
    try:
        return f"{float(value):,.{decimals}f}"
    except (ValueError, TypeError):
        return fallback


def _pct(value, decimals=2, fallback="N/A"):
    """Format as percentage."""
    if value is None:
        return fallback
    try:
        return f"{float(value):,.{decimals}f}%"
    except (ValueError, TypeError):
        return fallback


def _perf_color(value):
    """Heatmap background for a period return."""
    if value is None or value == 0:
        return config.PERF_COLORS["neutral"]
    if value > 0:
        for threshold, color in config.PERF_COLORS["positive"]:
            if value > threshold:
                return color
    for threshold, color in config.PERF_COLORS["negative"]:
        if value < threshold:
            return color
    return config.PERF_COLORS["neutral"]


def _company_url(record):
    """External company page for a record, or None without an exchange code."""
    code = record.company_code
    return config.COMPANY_URL.format(code=code) if code else None


templates.env.globals.update(
    APP_TITLE=config.APP_TITLE,
    APP_DESCRIPTION=config.APP_DESCRIPTION,
    TOGGLEABLE_COLUMNS=config.TOGGLEABLE_COLUMNS,
    PERF_COLUMNS=config.PERF_COLUMNS,
)

templates.env.filters["fmt"] = _fmt
templates.env.filters["pct"] = _pct
templates.env.filters["perf_color"] = _perf_color
templates.env.filters["company_url"] = _company_url


# ── Register routes ──────────────────────────────────────────────────────────
from stocktable.routes import home, upload, api  # noqa: E402

app.include_router(home.router)
app.include_router(upload.router)
app.include_router(api.router)
