"""
FastAPI application entrypoint.

    uvicorn api.main:app --reload
"""
from fastapi import FastAPI
from api.routes import router, settings
from mouthstate.config import configure_logging

configure_logging(settings)
app = FastAPI(title="Mouth State API", version="1.0.0")
app.include_router(router)

@app.get("/health")
def health() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Simple status payload.
    """
    return {"status": "ok"}
