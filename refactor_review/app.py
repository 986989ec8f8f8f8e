import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from refactor_review.core.config import Settings
from refactor_review.infrastructure import GeminiTransformClient, configure_transform_client, reset_transform_client
from refactor_review.routes import session


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        client: GeminiTransformClient | None = None
        if settings.api_key:
            client = GeminiTransformClient(
                settings.api_key,
                model=settings.model,
                api_base=settings.api_base,
                timeout=settings.timeout,
            )
            configure_transform_client(client)
            logger.info("using Gemini model %s", settings.model)
        else:
            reset_transform_client()
            logger.warning("GEMINI_API_KEY is not set; transform requests will report an error")
        try:
            yield
        finally:
            if client is not None:
                await client.aclose()
                reset_transform_client()

    app = FastAPI(title="AI Refactor & Review API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(session.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        return JSONResponse(
            {
                "message": "AI Refactor & Review API",
                "docs": "/docs",
                "session": "/api/session",
            }
        )

    return app


app = create_app()
