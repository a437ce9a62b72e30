import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from site_analyzer.config import APP_NAME, LOG_LEVEL
from site_analyzer.routes import error_response, router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=APP_NAME,
    version="1.0.0"
)

# ---------------------------
# Routes
# ---------------------------
app.include_router(router)


# ---------------------------
# Bad JSON / wrong types -> same error shape as a missing URL
# ---------------------------
@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    return error_response(400, "Invalid request body")


# ---------------------------
# Health check
# ---------------------------
@app.get("/", tags=["health"])
def health():
    return {
        "status": "ok",
        "service": APP_NAME
    }
