"""Restaurant (tenant) ORM model."""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from siptakip.db.base import Base

CONTRACT_STATUSES = ("lead", "trial", "active", "expired")


class Restaurant(Base):
    """Tenant root owning menu, tables, staff and orders."""

    __tablename__ = "restaurants"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    subscription_plan: Mapped[str] = mapped_column(String(32), nullable=False, default="free")
    logo_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    contract_status: Mapped[str] = mapped_column(String(16), nullable=False, default="lead")
    contract_months: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    contract_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    monthly_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    contact_person: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    users: Mapped[list["User"]] = relationship(back_populates="restaurant")
    tables: Mapped[list["DiningTable"]] = relationship(back_populates="restaurant", cascade="all, delete-orphan")
    categories: Mapped[list["Category"]] = relationship(back_populates="restaurant", cascade="all, delete-orphan")
