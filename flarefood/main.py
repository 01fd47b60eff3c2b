import logging

from fastapi import FastAPI

from flarefood.api import correlations
from flarefood.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Flare Food", version="0.1.0")

# Include routers
app.include_router(correlations.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
