#!/usr/bin/env python3
"""
Seat Seed Script
Create any missing seats of the fixed coach layout

Notes:
- Idempotent: existing seats (and their availability) are left untouched
- Tables must exist already (`alembic upgrade head` or script/reset_database.py)
"""

import asyncio

from src.platform.database.orm_db_setting import dispose_engines, get_session_maker
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.seat_booking.app.command.initialize_seats_use_case import (
    InitializeSeatsUseCase,
)

# Register ORM models on Base.metadata
import src.service.seat_booking.driven_adapter.model  # noqa: F401  # isort: skip


async def main():
    print('💺 Seeding seats...')

    try:
        async with get_session_maker()() as session:
            created = await InitializeSeatsUseCase(uow=SqlAlchemyUnitOfWork(session)).initialize()
        print(f'✅ {created} seats created')
    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)
    finally:
        await dispose_engines()


if __name__ == '__main__':
    asyncio.run(main())
