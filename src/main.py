"""
Production FastAPI Application

Seat booking API with auth, seat map, booking transactions and observability.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import SERVICE_NAME, create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engines, get_engine, get_session_maker
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.seat_booking.app.command.initialize_seats_use_case import (
    InitializeSeatsUseCase,
)

# Register ORM models on Base.metadata
import src.service.seat_booking.driven_adapter.model  # noqa: F401  # isort: skip


async def seed_seats() -> int:
    async with get_session_maker()() as session:
        return await InitializeSeatsUseCase(uow=SqlAlchemyUnitOfWork(session)).initialize()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Seat Booking] Starting up...')

    tracing = TracingConfig(service_name=SERVICE_NAME)
    tracing.setup()
    Logger.base.info('📊 [Seat Booking] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Seat Booking] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️  [Seat Booking] Database engine ready + instrumented')

    if settings.SEED_SEATS_ON_STARTUP:
        created = await seed_seats()
        Logger.base.info(f'💺 [Seat Booking] Seat layout ensured ({created} created)')

    Logger.base.info('✅ [Seat Booking] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Seat Booking] Shutting down...')

    await dispose_engines()
    Logger.base.info('🗄️  [Seat Booking] Database engines disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Seat Booking] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [Seat Booking] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Train Seat Booking System - user accounts, seat map, seat selection and booking',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
