# api/app.py
import json
import logging
from typing import Any
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from pipelines.answer_query import answer_query
from pipelines.sanitize_universe import sanitize_universe, summarize_universe
from config.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

INVALID_BODY_ERROR = "Impossible de traiter la question. Vérifiez le format du JSON."
INVALID_UNIVERSE_ERROR = "Format JSON invalide."

app = FastAPI(title="Business Objects Universe Assistant")

class InvalidBody(Exception):
    pass

async def read_json(request: Request) -> Any:
    # Only framing errors fail; any parseable JSON value is handed to the core.
    raw = await request.body()
    # ValueError also covers JSONDecodeError, UnicodeDecodeError and the int digit limit
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Unparseable request body on {request.url.path}: {e}")
        raise InvalidBody() from e

def error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})

def to_json(model) -> Any:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.post("/query")
async def query_endpoint(request: Request):
    try:
        body = await read_json(request)
    except InvalidBody:
        return error_response(INVALID_BODY_ERROR)

    if not isinstance(body, dict):
        body = {}
    result = await run_in_threadpool(answer_query, body.get("question") or "", body.get("universe"))
    return to_json(result)

@app.post("/universe")
async def universe_endpoint(request: Request):
    try:
        raw = await read_json(request)
    except InvalidBody:
        return error_response(INVALID_UNIVERSE_ERROR)

    universe = await run_in_threadpool(sanitize_universe, raw)
    return {
        "universe": universe.to_json(),
        "summary": to_json(summarize_universe(universe)),
    }
