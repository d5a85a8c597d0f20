import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from newsverdict.api.v1.endpoints import router as v1_router
from newsverdict.core.config import config
from newsverdict.core.errors import AnalysisError, InvalidRequestError

logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=config.PROJECT_NAME,
    version=config.VERSION,
    openapi_url=f"{config.API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=config.CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def allow_any_origin(request: Request, call_next):
    # CORSMiddleware only answers requests carrying an Origin header.
    response = await call_next(request)
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    return response


app.include_router(v1_router)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"Error in analyze-news function: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Unparsable or non-object bodies are the same client error as missing text.
    logger.warning(f"Rejected request body: {exc.errors()}")
    error = InvalidRequestError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.get("/")
async def root():
    return {"message": "Welcome to the News Verdict Backend API! Check /docs for API documentation."}


@app.get("/health")
async def health_check():
    return {
        "status": "operational",
        "message": "The News Verdict Backend API is running smoothly.",
        "version": config.VERSION,
        "api_configured": bool(config.LOVABLE_API_KEY),
    }


def main():
    import uvicorn

    logger.info(f"Starting {config.PROJECT_NAME} on {config.HOST}:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
