from datetime import date, datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.database import Database
from app.main import create_app
from app.schemas.common import TravelStyle
from app.schemas.trip import CreateTripOption, CreateTripRequest, FlightOffer, HotelOffer
from app.services.trip_service import trip_service


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.connect(create_schema=True)
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
async def client(database):
    app = create_app(Settings(database_url=database.url), database=database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


def trip_request_payload(**overrides) -> CreateTripRequest:
    data = {
        "origin_city": "New York",
        "destination": "Paris",
        "start_date": date(2026, 6, 1),
        "number_of_days": 7,
        "budget_total": 400000,
        "travel_style": TravelStyle.BALANCED,
    }
    data.update(overrides)
    return CreateTripRequest(**data)


def trip_option_payload(**overrides) -> CreateTripOption:
    data = {
        "flight": FlightOffer(
            provider="Air France",
            price=90000,
            departure_time=datetime(2026, 6, 1, 18, 0, tzinfo=timezone.utc),
            return_time=datetime(2026, 6, 8, 10, 0, tzinfo=timezone.utc),
            deep_link="https://example.com/flight",
        ),
        "hotel": HotelOffer(
            name="Hotel Lutetia",
            price_total=120000,
            rating=4.6,
            deep_link="https://example.com/hotel",
        ),
        "score": 82.0,
        "explanation": "Good balance of price and comfort.",
    }
    data.update(overrides)
    return CreateTripOption(**data)


@pytest.fixture
async def trip_option(session):
    trip_request = await trip_service.create_trip_request(session, trip_request_payload())
    return await trip_service.create_trip_option(session, trip_request, trip_option_payload())
