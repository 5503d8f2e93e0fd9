from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, Date, DateTime, Enum, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.registry.core.domain.models import AnimalSize
from src.shared.database.database import Base


class AnimalEntity(Base):
    """SQLAlchemy model for Animal table."""
    __tablename__ = "animals"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    # Case-insensitive name uniqueness is checked by the service
    name: Mapped[str] = mapped_column(String(50), index=True)
    breed: Mapped[str] = mapped_column(String(100), index=True)
    age: Mapped[int] = mapped_column(Integer)
    color: Mapped[str] = mapped_column(String(50))
    weight: Mapped[float] = mapped_column(Float)
    birth_date: Mapped[date] = mapped_column(Date)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_vaccinated: Mapped[bool] = mapped_column(Boolean, nullable=False)
    size: Mapped[AnimalSize | None] = mapped_column(
        Enum(AnimalSize, name="animal_size", values_callable=lambda x: [e.value for e in x]),
        nullable=True
    )
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    owner_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("owners.id"),
        nullable=True,
        index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
