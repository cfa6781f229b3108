"""
ProgramPulse FastAPI Application — Program health & risk aggregation.

  GET  /health                        → {"status": "ok", ...}
  POST /health-score                  → health score for posted entities
  POST /risk-matrix                   → probability × impact heatmap
  GET  /health-bands/{score}          → display classification of a score
  GET  /programs/health               → list-card summaries
  GET  /programs/{program_id}/report  → full program health report
  GET  /dashboard/metrics             → portfolio counters
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pulse.api.routes.health import router as health_router
from pulse.api.routes.programs import router as programs_router
from pulse.api.routes.scoring import router as scoring_router
from pulse.config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("pulse")

app = FastAPI(
    title="ProgramPulse",
    description="Program health scoring and risk matrix aggregation",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(scoring_router)
app.include_router(programs_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = await request.body()
    logger.error(f"Validation Error. Raw body: {body.decode('utf-8')[:500]} | Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_errors(exc), "body": body.decode("utf-8")[:100]},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may carry exception objects that JSONResponse cannot encode
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pulse.main:app", host=settings.host, port=settings.port)
