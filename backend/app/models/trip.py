import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, JSONType


class TripRequest(Base):
    __tablename__ = "trip_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    origin_city: Mapped[str] = mapped_column(String(100), nullable=False)
    destination: Mapped[str | None] = mapped_column(String(100))
    start_date: Mapped[date | None] = mapped_column(Date)
    end_date: Mapped[date | None] = mapped_column(Date)
    number_of_days: Mapped[int | None] = mapped_column(Integer)
    budget_total: Mapped[int] = mapped_column(Integer, nullable=False)
    travel_style: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    trip_options: Mapped[list["TripOption"]] = relationship(
        back_populates="trip_request",
        passive_deletes=True,
        order_by="TripOption.score.desc()",
    )


class TripOption(Base):
    __tablename__ = "trip_options"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # SET NULL keeps booked options (and their payments) when a request is removed
    trip_request_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("trip_requests.id", ondelete="SET NULL"), index=True
    )
    destination: Mapped[str] = mapped_column(String(100), nullable=False)
    total_cost: Mapped[int] = mapped_column(Integer, nullable=False)
    remaining_budget: Mapped[int] = mapped_column(Integer, nullable=False)
    activity_budget: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    explanation: Mapped[str] = mapped_column(Text, nullable=False, default="")
    itinerary_json: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    lock_status: Mapped[str] = mapped_column(String(20), default="UNLOCKED")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    trip_request: Mapped["TripRequest | None"] = relationship(back_populates="trip_options")
    flight_option: Mapped["FlightOption | None"] = relationship(
        back_populates="trip_option", cascade="all, delete-orphan", uselist=False
    )
    hotel_option: Mapped["HotelOption | None"] = relationship(
        back_populates="trip_option", cascade="all, delete-orphan", uselist=False
    )
    activity_options: Mapped[list["ActivityOption"]] = relationship(
        back_populates="trip_option",
        cascade="all, delete-orphan",
        order_by="ActivityOption.position",
    )


class FlightOption(Base):
    __tablename__ = "flight_options"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_option_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip_options.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    provider: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    departure_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    return_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deep_link: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    lock_status: Mapped[str] = mapped_column(String(20), default="UNLOCKED")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    trip_option: Mapped["TripOption"] = relationship(back_populates="flight_option")


class HotelOption(Base):
    __tablename__ = "hotel_options"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_option_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip_options.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    price_total: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[float | None] = mapped_column(Float)
    deep_link: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    lock_status: Mapped[str] = mapped_column(String(20), default="UNLOCKED")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    trip_option: Mapped["TripOption"] = relationship(back_populates="hotel_option")
