from datetime import datetime

from sqlalchemy import ARRAY, JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


# INTEGER[] on PostgreSQL, JSON list on SQLite (local tests)
SeatIdList = ARRAY(Integer).with_variant(JSON(), 'sqlite')


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    reference: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    seat_ids: Mapped[list[int]] = mapped_column(SeatIdList, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='active', nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self):
        return f'<BookingModel(id={self.id}, reference={self.reference}, status={self.status})>'
