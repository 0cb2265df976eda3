"""Delivery marketplace credentials per restaurant."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from siptakip.db.base import Base

PLATFORMS = ("trendyol_go", "getir", "migros", "yemeksepeti")


class PlatformIntegration(Base):
    __tablename__ = "platform_integrations"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "platform", name="uq_platform_integrations_restaurant_platform"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    restaurant_id: Mapped[str] = mapped_column(ForeignKey("restaurants.id"), nullable=False, index=True)
    platform: Mapped[str] = mapped_column(String(32), nullable=False)
    seller_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    store_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    store_link: Mapped[str | None] = mapped_column(String(512), nullable=True)
    api_key: Mapped[str | None] = mapped_column(String(255), nullable=True)
    api_secret: Mapped[str | None] = mapped_column(String(255), nullable=True)
    token: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
