#!/usr/bin/env python3
"""
Database Reset Script
Reset the seat booking database structure

Features:
1. Drop & Recreate Tables - wipe users, seats and bookings
2. Seed Seats - recreate the 80-seat coach layout

Notes:
- Works against any DATABASE_URL (PostgreSQL or a local SQLite file)
- Production schemas are managed by `alembic upgrade head`, this is for local dev
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engines,
    drop_db_and_tables,
    get_session_maker,
)
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.seat_booking.app.command.initialize_seats_use_case import (
    InitializeSeatsUseCase,
)

# Register ORM models on Base.metadata
import src.service.seat_booking.driven_adapter.model  # noqa: F401  # isort: skip


async def drop_and_recreate_tables() -> None:
    print(f'Database URL: {settings.DATABASE_URL_ASYNC}')

    print('🗑️ Dropping tables...')
    await drop_db_and_tables()
    print('   ✅ Tables dropped')

    print('🏗️ Creating tables...')
    await create_db_and_tables()
    print('   ✅ Tables created')


async def seed_seats() -> int:
    async with get_session_maker()() as session:
        return await InitializeSeatsUseCase(uow=SqlAlchemyUnitOfWork(session)).initialize()


async def main():
    print('🔄 Starting database reset...')
    print('=' * 50)

    try:
        await drop_and_recreate_tables()
        print()

        created = await seed_seats()
        print(f'💺 {created} seats created')
        print()

        print('=' * 50)
        print('✅ Database reset completed!')
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        exit(1)
    finally:
        await dispose_engines()


if __name__ == '__main__':
    asyncio.run(main())
