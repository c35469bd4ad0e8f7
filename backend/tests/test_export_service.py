import uuid
from datetime import date, datetime, timezone

import pytest
from reportlab.platypus import SimpleDocTemplate
from reportlab.platypus.doctemplate import LayoutError

from app.schemas.booking import ActivityConfirmation, BookingConfirmations, FlightConfirmation, HotelConfirmation
from app.schemas.itinerary import ItineraryDocument, PaymentSummary
from app.services.errors import DependencyFailure
from app.services.export_service import export_service, format_money


def make_document(**overrides) -> ItineraryDocument:
    data = {
        "trip_id": uuid.uuid4(),
        "destination": "Barcelona & Montserrat <day trips>",
        "start_date": date(2026, 4, 10),
        "end_date": date(2026, 4, 14),
        "number_of_days": 4,
        "flight": None,
        "hotel": None,
        "activities": [],
        "total_cost": 250000,
        "score": 71.0,
        "traveler_name": "Jo & Sam",
        "traveler_email": "jo@example.com",
        "remaining_budget": 50000,
        "confirmations": BookingConfirmations(),
    }
    data.update(overrides)
    return ItineraryDocument(**data)


def test_format_money():
    assert format_money(123456) == "$1,234.56 USD"
    assert format_money(0, "EUR") == "€0.00 EUR"
    assert format_money(2550, "GBP") == "£25.50 GBP"
    assert format_money(100, "CHF") == "1.00 CHF"


def test_minimal_document_renders():
    pdf = export_service.generate_itinerary_pdf(make_document())
    assert pdf.startswith(b"%PDF")


def test_full_document_renders():
    confirmations = BookingConfirmations(
        flight=FlightConfirmation(
            confirmation_code="IB7Q",
            pnr="QWERTY",
            provider="Iberia",
            departure_time=datetime(2026, 4, 10, 9, 0, tzinfo=timezone.utc),
            return_time=datetime(2026, 4, 14, 20, 0, tzinfo=timezone.utc),
            total_price=80000,
        ),
        hotel=HotelConfirmation(
            confirmation_code="H-22",
            hotel_name="Hotel Arts",
            check_in=date(2026, 4, 10),
            check_out=date(2026, 4, 14),
            nights=4,
            total_price=120000,
        ),
        activities=[
            ActivityConfirmation(
                confirmation_code="TAP-1",
                activity_name="Tapas Walking Tour",
                date=date(2026, 4, 11),
                time="19:00",
                total_price=7900,
            ),
        ],
    )
    document = make_document(
        confirmations=confirmations,
        payment=PaymentSummary(payment_intent_id="pi_1", amount=250000, currency="USD"),
    )
    pdf = export_service.generate_itinerary_pdf(document)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_layout_failure_is_a_dependency_failure(monkeypatch):
    def broken_build(self, flowables, *args, **kwargs):
        raise LayoutError("Flowable too large")

    monkeypatch.setattr(SimpleDocTemplate, "build", broken_build)

    with pytest.raises(DependencyFailure) as exc_info:
        export_service.generate_itinerary_pdf(make_document())
    assert exc_info.value.status_code == 500
