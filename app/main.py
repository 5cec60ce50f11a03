from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.core.config import settings
from app.core.logging import configure_logging
from app.api.tools import router as api_router
from app.dependencies import get_provider, get_registry

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Register tools before serving; duplicate ids abort startup here
    get_registry()
    yield
    await get_provider().aclose()

app = FastAPI(
    title=settings.service_title,
    version=settings.service_version,
    lifespan=lifespan
)

app.include_router(api_router, prefix="/v1")

@app.get("/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
