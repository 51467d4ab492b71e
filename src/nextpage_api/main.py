import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from nextpage_api.api.routes.books import router as books_router
from nextpage_api.api.routes.library import router as library_router
from nextpage_api.api.routes.recommendations import router as recommendations_router
from nextpage_api.api.routes.users import router as users_router
from nextpage_api.config import settings
from nextpage_api.logging_config import configure_logging
from nextpage_api.middleware import RequestContextMiddleware

configure_logging(
    level=settings.log_level,
    output_format=settings.log_format,
    service_name=settings.log_service_name,
)
logger = logging.getLogger(__name__)
logger.info("Application bootstrapped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)
app.add_middleware(RequestContextMiddleware)
app.include_router(books_router)
app.include_router(library_router)
app.include_router(recommendations_router)
app.include_router(users_router)
