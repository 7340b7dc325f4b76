from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class DietEntry(Base):
    __tablename__ = "diet_entries"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)

    meal: Mapped[str] = mapped_column(String(20), nullable=False)  # breakfast, lunch, dinner, snack
    food: Mapped[str] = mapped_column(String(200), nullable=False)
    calories: Mapped[float] = mapped_column(Float, nullable=False)

    date: Mapped[date] = mapped_column(Date, index=True, nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="diet_entries")
