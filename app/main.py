from __future__ import annotations

from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from pydantic import BaseModel, Field

from config.settings import get_settings
from relay.core.errors import ProviderNotConfigured
from relay.core.transcript import Turn
from relay.relay import relay_transcript


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("rutdoc")

app = FastAPI(title="RutDoc Chat Relay", version="1.0.0")

# CORS: the widget is usually served from another origin during development
settings = get_settings()
if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class RelayRequest(BaseModel):
    messages: List[Turn] = Field(
        ...,
        description="Full conversation so far, oldest first (frontend-managed)",
    )


class RelayReply(BaseModel):
    reply: str


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request body on %s: %s errors", request.url.path, len(exc.errors()))
    return JSONResponse(status_code=422, content={"error": "Invalid request body"})


@app.post("/api/rutdoc", response_model=RelayReply)
def rutdoc(req: RelayRequest):
    settings = get_settings()
    logger.info(
        "Config: provider=%s model=%s key_set=%s",
        settings.provider,
        settings.model,
        settings.api_key_set,
    )
    logger.info("Incoming chat: turns=%s", len(req.messages))

    try:
        reply = relay_transcript(req.messages)
    except ProviderNotConfigured as e:
        logger.error("Relay is not configured: %s", e)
        return JSONResponse(
            status_code=500,
            content={"error": "Completion provider is not configured"},
        )
    except Exception as e:
        # Full detail stays in server logs; the caller only gets a generic message
        logger.exception("Provider call failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"error": "Error contacting completion provider"},
        )

    logger.info("Model responded: %s chars", len(reply))
    return RelayReply(reply=reply)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
