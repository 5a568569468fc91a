# Load environment variables from .env file first, before any other imports
from dotenv import load_dotenv
load_dotenv()

import os
import logging

from fastapi import FastAPI, Request

from embedding_service.api.routes import embeddings
from embedding_service.config import get_settings
from embedding_service.errors import EmbeddingPipelineError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    settings.log_credential_status()

    app = FastAPI(title="Entity Embedding Service", version="1.0.0")
    app.include_router(embeddings.router, tags=["embeddings"])

    @app.exception_handler(EmbeddingPipelineError)
    async def pipeline_error_handler(request: Request, exc: EmbeddingPipelineError):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
        return embeddings.error_response(exc.status_code, exc.to_dict())

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
