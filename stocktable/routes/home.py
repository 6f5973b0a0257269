"""Portfolio table route with filtering, sorting and column toggles."""

from fastapi import APIRouter, Depends, Request
from stocktable.main import templates
from stocktable.services.filter_sort import industry_options
from stocktable.services.portfolio_service import PortfolioService, get_portfolio_service
from stocktable.services.portfolio_view import PortfolioView

router = APIRouter(tags=["pages"])


@router.get("/")
def portfolio(request: Request, service: PortfolioService = Depends(get_portfolio_service)):
    view = PortfolioView.from_query(request.query_params)
    records = service.records

    ctx = {
        "view": view,
        "rows": view.rows(records),
        "total": len(records),
    }

    # Check if HTMX partial request
    if request.headers.get("HX-Request"):
        return templates.TemplateResponse(request, "partials/portfolio_table.html", ctx)

    ctx["industries"] = industry_options(records)
    return templates.TemplateResponse(request, "pages/portfolio.html", ctx)
