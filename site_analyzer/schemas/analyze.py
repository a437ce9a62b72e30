# site_analyzer/schemas/analyze.py
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class AnalyzeRequest(BaseModel):
    """
    Crawl request for the chatbot demo.
    `url` may omit the scheme ("example.com").
    """

    url: Optional[str] = Field(
        None,
        description="Website (or PDF) URL to crawl"
    )


class AnalyzeResponse(BaseModel):
    success: bool
    data: str
    title: str
    pagesScraped: int
    debug: Dict[str, Any]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
