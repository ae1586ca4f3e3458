from sqlalchemy import Boolean, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class SeatModel(Base):
    __tablename__ = 'seat'

    # Seeded with explicit ids 1..80, never generated
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    row_number: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_position: Mapped[int] = mapped_column(Integer, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (Index('ix_seat_row_position', 'row_number', 'seat_position'),)

    def __repr__(self):
        return f'<SeatModel(id={self.id}, row={self.row_number}, available={self.is_available})>'
