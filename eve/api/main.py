from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eve.api.routes.analyze import router as analyze_router
from eve.api.routes.export import router as export_router
from eve.api.routes.health import router as health_router
from eve.api.routes.transcribe import router as transcribe_router
from eve.extraction.errors import EmptyTranscriptError

app = FastAPI(
    title="EVE Meeting Assistant API",
    description="Structured insights from Dutch meeting transcripts",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(analyze_router)
app.include_router(transcribe_router)
app.include_router(export_router)


@app.exception_handler(EmptyTranscriptError)
async def empty_transcript_handler(request: Request, exc: EmptyTranscriptError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
