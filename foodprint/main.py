# foodprint/main.py
from dotenv import load_dotenv
load_dotenv()  # load .env before anything else

import logging
import os

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .ai_router import AnalysisError, analyze_image
from .config import ConfigError, get_settings
from .parsers import MissingImageError, to_data_url
from .prompts import SYSTEM_PROMPTS, USER_PROMPTS
from .schemas import AnalysisType, AnalyzeRequest

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ---- FastAPI app ------------------------------------------------------------
app = FastAPI(title="Foodprint analyze proxy")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


def error_response(message: str, status: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status)


def parse_analysis_type(raw: str | None) -> AnalysisType:
    if not raw:
        return AnalysisType.FOOD
    try:
        return AnalysisType(raw.strip().lower())
    except ValueError:
        raise AnalysisError(f"Unknown analysisType: {raw}", status=400)


def invalid_request(e: ValidationError) -> str:
    fields = sorted({".".join(str(p) for p in err["loc"]) or "body" for err in e.errors()})
    return "Invalid request: " + ", ".join(fields)


@app.get("/health")
def health():
    try:
        return {"ok": True, "model": get_settings().model}
    except ConfigError as e:
        logger.error("[proxy] bad configuration: %s", e)
        return {"ok": False, "error": str(e)}


# ---- Analysis ---------------------------------------------------------------
@app.post("/analyze-food")
async def analyze_food(request: Request):
    try:
        try:
            payload = AnalyzeRequest.model_validate(await request.json())
        except ValidationError as e:
            return error_response(invalid_request(e), 400)

        try:
            image_url = to_data_url(payload.imageBase64)
        except MissingImageError as e:
            return error_response(str(e), 400)

        analysis_type = parse_analysis_type(payload.analysisType)

        settings = get_settings()
        if settings.missing():
            logger.error("[proxy] %s is not configured", ", ".join(settings.missing()))
            return error_response("API key not configured", 500)

        result = await run_in_threadpool(
            analyze_image, image_url, analysis_type, payload.mealContext, settings
        )
        return {"result": result}

    except AnalysisError as e:
        return error_response(e.message, e.status)
    except Exception as e:
        logger.exception("[proxy] error in analyze-food")
        return error_response(str(e) or "Unknown error", 500)


# ---- Debug endpoints --------------------------------------------------------
@app.get("/debug/prompt")
def debug_prompt(analysisType: str = Query("food")):
    """Show the prompt text sent for a mode."""
    try:
        kind = parse_analysis_type(analysisType)
    except AnalysisError as e:
        return error_response(e.message, e.status)
    return {"analysisType": kind.value, "system": SYSTEM_PROMPTS[kind], "user": USER_PROMPTS[kind]}
