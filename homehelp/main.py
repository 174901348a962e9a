# homehelp/main.py
import logging
from contextlib import asynccontextmanager

from arq import create_pool
from arq.connections import RedisSettings
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homehelp.core.config import settings
from homehelp.core.database import AsyncSessionLocal, create_all_tables
from homehelp.core.exceptions import setup_exception_handlers
from homehelp.core.logging_config import setup_logging, mask_database_uri
from homehelp.modules.auth.router import router as auth_router
from homehelp.modules.users.router import router as users_router
from homehelp.modules.services.router import router as services_router
from homehelp.modules.services.service import seed_default_services
from homehelp.modules.providers.router import router as providers_router
from homehelp.modules.credentials.router import router as credentials_router
from homehelp.modules.bookings.router import router as bookings_router
from homehelp.modules.payments.router import router as payments_router
from homehelp.modules.reviews.router import router as reviews_router
from homehelp.modules.admin.router import router as admin_router
from homehelp.modules.health.router import router as health_router, status_router

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting %s (%s), database %s",
        settings.PROJECT_NAME,
        settings.ENVIRONMENT,
        mask_database_uri(settings.DATABASE_URI),
    )

    if settings.AUTO_CREATE_TABLES:
        await create_all_tables()
        async with AsyncSessionLocal() as db:
            created = await seed_default_services(db)
        if created:
            logger.info("Seeded %d default services", created)

    app.state.arq_pool = None
    if settings.TASK_QUEUE_ENABLED:
        app.state.arq_pool = await create_pool(RedisSettings.from_dsn(settings.REDIS_URL))
        logger.info("Task queue connected")

    yield

    if app.state.arq_pool is not None:
        await app.state.arq_pool.close()


app = FastAPI(
    title="HomeHelp Backend",
    description="Marketplace API connecting homeowners with home-service providers.",
    version="0.1.0",
    lifespan=lifespan,
    # docs are only served outside production
    docs_url="/docs" if settings.ENVIRONMENT != "prod" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

app.include_router(status_router)
app.include_router(health_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(services_router, prefix="/api")
app.include_router(providers_router, prefix="/api")
app.include_router(credentials_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(payments_router, prefix="/api")
app.include_router(reviews_router, prefix="/api")
app.include_router(admin_router, prefix="/api/admin")
