"""SQLAlchemy ORM models for the rider directory."""

from datetime import UTC, datetime

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


riders_tags = Table(
    "riders_tags",
    Base.metadata,
    Column("rider_id", ForeignKey("riders.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Rider(Base):
    __tablename__ = "riders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    pronouns: Mapped[str | None] = mapped_column(String, nullable=True)
    postal: Mapped[str | None] = mapped_column(String, nullable=True)
    city: Mapped[str] = mapped_column(String, default="Toronto")
    province: Mapped[str] = mapped_column(String, default="Ontario")
    country: Mapped[str] = mapped_column(String, default="Canada")
    inserted_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    tags: Mapped[list["Tag"]] = relationship(secondary=riders_tags, back_populates="riders")
    participations: Mapped[list["CampaignRider"]] = relationship(
        back_populates="rider", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_rider_name", "name"),)

    def __repr__(self) -> str:
        return f"Rider(id={self.id!r}, name={self.name!r})"


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)

    riders: Mapped[list[Rider]] = relationship(secondary=riders_tags, back_populates="tags")


class CampaignRider(Base):
    """A rider's participation in one campaign; only counted for ranking."""

    __tablename__ = "campaigns_riders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rider_id: Mapped[int] = mapped_column(
        ForeignKey("riders.id", ondelete="CASCADE"), nullable=False
    )
    campaign_id: Mapped[int] = mapped_column(Integer, nullable=False)
    inserted_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    rider: Mapped[Rider] = relationship(back_populates="participations")

    __table_args__ = (Index("idx_campaign_rider_rider", "rider_id"),)
