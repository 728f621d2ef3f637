from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from errors import setup_error_handlers
from gemini.client import build_client
from gemini.fallback import FallbackCaller
from middleware import setup_middleware
from routes import chat, polish, summary
from settings import Settings, load_settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "ElexicoAI Backend"
VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("ElexicoAI backend running on port %s", settings.port)
    logger.info("Health: http://localhost:%s/health", settings.port)
    logger.info("Gemini key: %s", "loaded" if settings.gemini_api_key else "MISSING")
    logger.info("Model chain: %s", ", ".join(settings.gemini_models))
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="ElexicoAI API", version=VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.caller = FallbackCaller(
        build_client(settings.gemini_api_key),
        settings.gemini_models,
    )

    setup_error_handlers(app)
    # CORS is added last so it wraps the 413/500 responses built by the middleware
    setup_middleware(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(chat.router)
    app.include_router(summary.router)
    app.include_router(polish.router)

    @app.get("/")
    def root():
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": VERSION,
            "endpoints": [
                "POST /api/chat",
                "POST /api/summary",
                "POST /api/polish-sentence",
            ],
        }

    @app.get("/health")
    def health():
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
