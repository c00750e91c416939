import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pictag.config import get_settings
from pictag.routers import process_image
from pictag.services.relay import RelayService, resolve_api_key

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    relay = RelayService(settings)
    await relay.start()
    app.state.relay = relay

    if resolve_api_key(settings) is None:
        logger.warning("Frida API key not set (Frida:ApiKey / FRIDA_API_KEY); upstream calls are unauthenticated")
    logger.info("Relay ready, upstream: %s", settings.frida_completions_url)
    yield

    # --- Shutdown ---
    await relay.stop()
    logger.info("Relay stopped.")


app = FastAPI(
    title="pictag",
    description="Image categorization relay for a hosted LLM completions API",
    version="1.0.0",
    lifespan=lifespan,
)

# Local-dev client/backend split: no origin, method or header restriction.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(process_image.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
