"""FastAPI application exposing weigh-in verification."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .logging import get_logger
from .runtime import Runtime, build_runtime
from .service import ImageTooLargeError

logger = get_logger(__name__)


class ParseRequest(BaseModel):
    text: str


class ProcessRequest(BaseModel):
    image_base64: str = Field(..., alias="imageBase64", min_length=1)
    photo_url: Optional[str] = Field(None, alias="photoUrl")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


def get_runtime(request: Request) -> Runtime:
    runtime: Runtime = request.app.state.runtime
    return runtime


def create_app(runtime: Runtime | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        active = runtime or build_runtime()
        app.state.runtime = active
        try:
            yield
        finally:
            active.close()

    api = FastAPI(title="WeighIn Service", version="1.0.0", lifespan=lifespan)

    @api.get("/health")
    def health(runtime: Runtime = Depends(get_runtime)) -> dict:
        return {
            "status": "healthy",
            "service": "weighin",
            "recognizer": "google-vision" if runtime.config.uses_vision else "static",
        }

    @api.post("/weight/parse")
    def parse_weight(body: ParseRequest, runtime: Runtime = Depends(get_runtime)) -> dict:
        reading = runtime.service.parse_text(body.text)
        return reading.as_dict()

    @api.post("/weight/process")
    def process_weight(body: ProcessRequest, runtime: Runtime = Depends(get_runtime)):
        try:
            reading = runtime.service.process_image(body.image_base64)
        except ImageTooLargeError as exc:
            limit_mb = exc.limit // (1024 * 1024)
            raise HTTPException(
                status_code=413,
                detail=f"Image too large. Maximum size is {limit_mb}MB",
            ) from exc

        if not reading.success:
            return JSONResponse(status_code=400, content=reading.as_dict())
        return reading.as_dict()

    return api
