import logging
from collections.abc import Sequence
from typing import Any, get_args

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from post_enhancer.api.schemas import REQUIRED_FIELDS, ErrorResponse, GenerateRequest, GenerateResponse, Tone
from post_enhancer.service.generator import GenerateService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="post-enhancer", version="0.1.0")
service = GenerateService()


def _is_missing(error: Any) -> bool:
    """True for an absent, empty or null field."""
    if error.get("type") in {"missing", "string_too_short"}:
        return True
    if "input" not in error:
        return False
    value = error["input"]
    return value is None or value == ""


def describe_validation_errors(errors: Sequence[Any]) -> str:
    missing: list[str] = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        kind = error.get("type", "")
        if kind == "json_invalid":
            return "Invalid request body: malformed JSON."
        if loc == ("body",) and kind == "missing":
            return f"Missing required fields in request: {', '.join(REQUIRED_FIELDS)}."
        field = str(loc[-1]) if len(loc) > 1 else ""
        if field not in REQUIRED_FIELDS:
            continue
        if _is_missing(error) and field not in missing:
            missing.append(field)
    if missing:
        ordered = [name for name in REQUIRED_FIELDS if name in missing]
        return f"Missing required fields in request: {', '.join(ordered)}."

    first = errors[0] if errors else {}
    loc = tuple(first.get("loc", ()))
    if len(loc) > 1 and loc[-1] == "tone":
        return f"Invalid tone. Expected one of: {', '.join(get_args(Tone))}."
    if loc and loc[-1] != "body":
        return f"Invalid value for {loc[-1]}: {first.get('msg', 'invalid input')}."
    return f"Invalid request body: {first.get('msg', 'invalid input')}."


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_errors(exc.errors())
    logger.info("generate.rejected path=%s detail=%s", request.url.path, message)
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.post(
    "/api/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate(req: GenerateRequest) -> GenerateResponse | JSONResponse:
    result = await service.generate(req)
    if not result.ok:
        return JSONResponse(status_code=500, content=ErrorResponse(error=result.error or "").model_dump())
    return GenerateResponse(post=result.post or "")
