import os
from typing import Any
from fastapi import APIRouter, Body
from app.core import config
from app.models.lint import ErrorBody, StylesInfo
from app.services.validate import validate_request
from app.services.lint import lint_document

router = APIRouter(prefix="/api", tags=["lint"])

@router.post(
    "/lint",
    responses={400: {"model": ErrorBody}, 413: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)
def lint(payload: Any = Body(None)):
    req = validate_request(payload)
    return lint_document(req)

@router.get("/styles", response_model=StylesInfo)
def styles():
    try:
        installed = sorted(
            d for d in os.listdir(config.STYLES_PATH)
            if os.path.isdir(os.path.join(config.STYLES_PATH, d))
        )
    except OSError:
        installed = []
    return StylesInfo(styles=list(config.ALLOWED_STYLES), installed=installed)
