import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from starlaunch.api.routes import api_router
from starlaunch.core.config import get_settings
from starlaunch.core.exceptions import register_exception_handlers
from starlaunch.core.logging import setup_logging
from starlaunch.middleware.request_context import RequestContextMiddleware
from starlaunch.storage import Storage, build_storage

settings = get_settings()
setup_logging(logging.DEBUG if settings.DEBUG else logging.INFO)


def create_app(storage: Storage | None = None) -> FastAPI:
    fastapi_app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)
    fastapi_app.state.storage = storage or build_storage(settings)
    fastapi_app.include_router(api_router, prefix=settings.API_PREFIX)
    fastapi_app.add_middleware(RequestContextMiddleware)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(fastapi_app)

    @fastapi_app.on_event("startup")
    async def on_startup():
        fastapi_app.state.storage.init_schema()

    return fastapi_app


app = create_app()
