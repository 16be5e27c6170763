import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
import requests

from acpl import RankConfig, RecordStreamError
from errors import BAD_REQUEST, RATE_LIMITED, UPSTREAM_ERROR, format_error
from lichess_client import UpstreamStatusError, retrieve_results
from presentation import NO_GAMES_MESSAGE, TIME_CONTROL_SYMBOLS, GameRow, build_rows, time_control_symbol
from rate_limiter import TokenBucket

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

config = RankConfig.from_env()
rate_limiter = TokenBucket(config.rate_limit_per_second, config.rate_limit_burst)

app = FastAPI(title="ACPL Game Ranker", version="1.0.0")


# Must be registered before CORSMiddleware so that CORS stays the outer layer.
@app.middleware("http")
async def limit_and_disable_cache(request: Request, call_next):
    if not rate_limiter.acquire():
        logger.warning(f"Rate limit exceeded for {request.client.host if request.client else '?'}")
        response = JSONResponse(status_code=429, content=format_error(RATE_LIMITED))
    else:
        response = await call_next(request)
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
    response.headers["Pragma"] = "no-cache"
    return response


# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=422, content=format_error(BAD_REQUEST, detail=problems))


# ============================================================================
# Pydantic Models
# ============================================================================

class RankRequest(BaseModel):
    username: str = Field(..., min_length=1)
    time_control: str = ""
    rated_only: bool = False
    exclude_miniatures: bool = False


class RankResponse(BaseModel):
    username: str
    time_control: str
    time_control_symbol: str
    results: List[GameRow]
    message: str
    error: Optional[dict] = None


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/")
async def root():
    return {"message": "ACPL Game Ranker API", "status": "running"}


@app.get("/meta")
async def get_meta():
    """Return metadata about the API."""
    return {
        "name": "ACPL Game Ranker",
        "version": "1.0.0",
        "time_controls": list(TIME_CONTROL_SYMBOLS),
        "max_results": config.max_results,
        "miniature_plies": config.miniature_plies,
    }


@app.post("/rank", response_model=RankResponse)
def rank_games(req: RankRequest):
    """Rank a Lichess user's analysed games from most to least accurate."""
    logger.info(f"Ranking games for {req.username} ({req.time_control or 'all'}, rated_only={req.rated_only})")

    min_plies = config.miniature_plies if req.exclude_miniatures else 0
    message = ""
    error = None

    try:
        results = retrieve_results(req.username, req.time_control, req.rated_only, min_plies, config)
    except (requests.RequestException, UpstreamStatusError, RecordStreamError) as e:
        logger.error(f"Error retrieving results for {req.username}: {e}")
        message = f"Failed to retrieve games: {e}"
        error = format_error(UPSTREAM_ERROR, detail=str(e))
        results = []

    if not results:
        message = f"{message}\n\n{NO_GAMES_MESSAGE}" if message else NO_GAMES_MESSAGE

    return RankResponse(
        username=req.username,
        time_control=req.time_control,
        time_control_symbol=time_control_symbol(req.time_control),
        results=build_rows(results, config.max_results),
        message=message,
        error=error,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
