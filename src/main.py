import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from src.config.settings import settings
from src.database.client import close_db, init_db
from src.features.auth.router import router as auth_router
from src.features.chatroom.router import router as chatroom_router
from src.features.user.router import router as user_router
from src.shared.rate_limit import limiter, rate_limit_handler

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Handle startup and shutdown events."""
    await init_db()
    yield
    await close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    debug=settings.debug,
)

# Rate limiting (per-route limits are declared on the routes)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
    max_age=settings.cors_max_age,
)
logger.info(f"CORS configured for origins: {settings.cors_origins}")

# Router Registration
routers: list[APIRouter] = [
    auth_router,
    user_router,
    chatroom_router,
]

for router in routers:
    app.include_router(router, prefix=settings.api_prefix)


@app.get(f"{settings.api_prefix}/health")
async def health():
    return {"status": "healthy"}
