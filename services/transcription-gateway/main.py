"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from ddtrace import patch_all
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dependencies import shutdown, startup
from routes import transcribe_router, upload_router

patch_all()


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup()
    yield
    shutdown()


app = FastAPI(title="Transcription Gateway", lifespan=lifespan)
app.include_router(upload_router)
app.include_router(transcribe_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reports malformed requests as 400 rather than FastAPI's default 422."""
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
