"""JSON service endpoints for reading and replacing the stored portfolio."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from stocktable.errors import StoreUnavailableError
from stocktable.models import StockRecord
from stocktable.services.portfolio_service import PortfolioService, get_portfolio_service

router = APIRouter(prefix="/service", tags=["api"])


@router.get("/portfolio")
def get_portfolio(service: PortfolioService = Depends(get_portfolio_service)):
    """Return every stored record, or an empty array when nothing is stored yet."""
    try:
        records = service.read_stored()
    except StoreUnavailableError as e:
        logging.error(f"Error reading portfolio data: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to read portfolio data"})
    return [r.to_wire() for r in records]


@router.post("/portfolio")
async def update_portfolio(request: Request, service: PortfolioService = Depends(get_portfolio_service)):
    """Replace the stored portfolio with the ``data`` array of the JSON body."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list):
        return JSONResponse(status_code=400, content={"error": "Data must be an array"})

    try:
        records = [StockRecord.model_validate(item) for item in data]
    except ValidationError as e:
        logging.warning(f"Rejected portfolio update: {e.error_count()} invalid records")
        return JSONResponse(status_code=400, content={"error": "Data must be an array"})

    try:
        service.save(records)
    except StoreUnavailableError as e:
        logging.error(f"Error updating portfolio data: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to update portfolio data"})
    return {"success": True, "message": "Portfolio data updated successfully"}
