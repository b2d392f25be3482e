from __future__ import annotations

from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..detection.policy import TextLanguagePolicy
from ..detection.results import ClassificationResult
from ..logging_utils import get_logger, setup_logging_from_config
from ..monitoring.log_writer import RequestLogger
from .dependencies import get_detector_config, get_policy, get_request_logger
from .schemas import (
    ErrorResponse,
    IsEnglishBatchItem,
    IsEnglishBatchRequest,
    IsEnglishRequest,
    IsEnglishResponse,
)

logger = get_logger(__name__)

app = FastAPI(
    title="English Detector",
    version="1.0.0",
    description="Guesses whether free text is written in English",
)

# CORS (adjust for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_error(exc)
    logger.info("Rejected invalid request", extra={"path": request.url.path, "error": message})
    return JSONResponse(status_code=422, content=ErrorResponse(error=message).model_dump())


@app.on_event("startup")
def configure_logging() -> None:
    # `english-detector serve` has already configured logging from the same file.
    setup_logging_from_config(get_detector_config().get("logging"), force=False)
    # Load the detection engines before the first request arrives.
    get_policy()


def _log_payload(endpoint: str, result: ClassificationResult) -> dict:
    return {"endpoint": endpoint, **result.to_log_dict()}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post(
    "/is-english",
    response_model=IsEnglishResponse,
    responses={422: {"model": ErrorResponse}},
)
def is_english(
    req: IsEnglishRequest,
    policy: TextLanguagePolicy = Depends(get_policy),
    request_logger: RequestLogger = Depends(get_request_logger),
):
    logger.info("is-english request received", extra={"text_length": len(req.text)})
    result = policy.classify(req.text, req.default_on_undetermined, req.detection_methods)
    request_logger.log(text=req.text, payload=_log_payload("is-english", result))
    logger.info("is-english request processed", extra=result.to_log_dict())
    return IsEnglishResponse(is_english=result.is_english)


@app.post(
    "/is-english-batch",
    response_model=List[IsEnglishBatchItem],
    responses={422: {"model": ErrorResponse}},
)
def is_english_batch(
    req: IsEnglishBatchRequest,
    policy: TextLanguagePolicy = Depends(get_policy),
    request_logger: RequestLogger = Depends(get_request_logger),
):
    logger.info("is-english-batch request received", extra={"batch_size": len(req.texts)})
    items = policy.classify_batch(req.texts, req.default_on_undetermined, req.detection_methods)
    for item in items:
        request_logger.log(text=item.text, payload=_log_payload("is-english-batch", item.result))
    n_english = sum(1 for item in items if item.is_english)
    logger.info("is-english-batch request processed", extra={"batch_size": len(items), "n_english": n_english})
    return [IsEnglishBatchItem(text=item.text, is_english=item.is_english) for item in items]
