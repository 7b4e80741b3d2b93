import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.endpoints import router as v1_router
from app.core.config import config

logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
log = logging.getLogger(__name__)

app = FastAPI(
    title=config.PROJECT_NAME,
    version=config.VERSION,
    openapi_url=f"{config.API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/")
async def root():
    return {"message": "Fake News Detection API (Gemini) is running"}


@app.get("/health")
async def health_check():
    return {
        "status": "operational",
        "message": "The Fake News Check API is running smoothly.",
        "version": config.VERSION
    }


if __name__ == "__main__":
    import uvicorn

    log.info(f"Starting {config.PROJECT_NAME} on {config.HOST}:{config.PORT}")

    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level="info")
