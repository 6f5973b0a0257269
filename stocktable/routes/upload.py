"""CSV upload page."""

import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile
from stocktable.main import templates
from stocktable.models import REQUIRED_COLUMNS
from stocktable.services.portfolio_service import (
    READ_ERROR_MESSAGE,
    PortfolioService,
    UploadResult,
    get_portfolio_service,
)

router = APIRouter(tags=["pages"])


def _render(request: Request, result: UploadResult | None = None):
    return templates.TemplateResponse(request, "pages/upload.html", {
        "required_columns": REQUIRED_COLUMNS,
        "result": result,
    })


@router.get("/upload")
def upload_form(request: Request):
    return _render(request)


@router.post("/upload")
async def upload_csv(
    request: Request,
    file: UploadFile | None = File(None),
    service: PortfolioService = Depends(get_portfolio_service),
):
    raw = None
    if file is not None and file.filename:
        try:
            raw = await file.read()
        except OSError as e:
            logging.error(f"Failed to read uploaded file {file.filename}: {e}")
            return _render(request, UploadResult(error=READ_ERROR_MESSAGE))
        logging.info(f"Received upload {file.filename} ({len(raw)} bytes)")

    return _render(request, service.upload(raw))
