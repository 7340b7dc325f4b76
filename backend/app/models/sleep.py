from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.stats.records import sleep_hours


class SleepEntry(Base):
    __tablename__ = "sleep_entries"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)

    bedtime: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    waketime: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    quality: Mapped[str] = mapped_column(String(20), nullable=False)  # excellent, good, fair, poor
    notes: Mapped[str] = mapped_column(Text, default="")

    # Calendar day the night is booked against (usually the wake-up day)
    date: Mapped[date] = mapped_column(Date, index=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="sleep_entries")

    @property
    def duration_hours(self) -> float:
        """Hours slept, derived from the bedtime/waketime interval."""
        return sleep_hours(self.bedtime, self.waketime) or 0.0
