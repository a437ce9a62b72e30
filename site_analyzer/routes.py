import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from site_analyzer.config import API_PREFIX
from site_analyzer.crawlers.urls import normalize_target
from site_analyzer.pipeline import analyze_site
from site_analyzer.schemas.analyze import AnalyzeRequest, AnalyzeResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix=API_PREFIX)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# --------------------------------------------------
# Crawl a website and build chatbot context
# --------------------------------------------------
@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze(req: AnalyzeRequest):
    # plain `def`: FastAPI runs it in its threadpool, the crawl blocks
    url = (req.url or "").strip()
    if not url:
        return error_response(400, "URL is required")

    try:
        target = normalize_target(url)
    except ValueError as e:
        return error_response(400, f"Invalid URL: {e}")

    try:
        return analyze_site(target)
    except Exception:
        logger.exception("Deep crawl failed for %s", target.url)
        return error_response(500, "Deep crawl failed.")
