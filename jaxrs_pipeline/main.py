from contextlib import asynccontextmanager

from fastapi import FastAPI

from jaxrs_pipeline.api.analysis_routes import router as analysis_router
from jaxrs_pipeline.core.logging import setup_logging

API_VERSION = "0.1.0"

tags_metadata = [
    {
        "name": "analysis",
        "description": "Run the JAX-RS analysis pipeline and list the available report backends.",
    },
    {"name": "health", "description": "Liveness probe."},
]


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    yield


app = FastAPI(
    title="JAX-RS Analyzer Pipeline",
    version=API_VERSION,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.include_router(analysis_router)


@app.get("/health", tags=["health"], summary="Health check")
def health() -> dict:
    return {"status": "healthy", "version": API_VERSION}
