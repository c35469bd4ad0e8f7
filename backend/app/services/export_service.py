"""Export service — PDF itinerary generation."""

import io
import logging
from datetime import date, datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from app.config import settings
from app.schemas.booking import ActivityConfirmation, FlightConfirmation, HotelConfirmation
from app.schemas.itinerary import ItineraryDocument, PaymentSummary
from app.services.errors import DependencyFailure

logger = logging.getLogger(__name__)

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("VALIGN", (0, 0), (-1, -1), "TOP"),
])


CURRENCY_SYMBOLS = {"USD": "$", "CAD": "$", "AUD": "$", "EUR": "€", "GBP": "£"}


def format_money(cents: int, currency: str = "USD") -> str:
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), "")
    return f"{symbol}{cents / 100:,.2f} {currency}"


def _fmt_date(value: date | datetime | None) -> str:
    if value is None:
        return "-"
    if isinstance(value, datetime):
        return value.strftime("%a %b %d, %Y %H:%M")
    return value.strftime("%B %d, %Y")


class ExportService:
    """Renders an assembled itinerary document; never touches the database."""

    def generate_itinerary_pdf(self, document: ItineraryDocument) -> bytes:
        buf = io.BytesIO()
        doc = SimpleDocTemplate(buf, pagesize=letter, topMargin=0.5 * inch)
        styles = getSampleStyleSheet()
        elements = []

        elements.append(Paragraph("TripOptimizer Itinerary", styles["Title"]))
        elements.append(Paragraph(f"Trip to {escape(document.destination)}", styles["Heading1"]))
        elements.append(Paragraph(
            f"{_fmt_date(document.start_date)} - {_fmt_date(document.end_date)} "
            f"({document.number_of_days} days)",
            styles["Normal"],
        ))
        elements.append(Spacer(1, 12))

        # Booking summary
        elements.append(Paragraph("<b>Booking Summary</b>", styles["Heading2"]))
        summary = [
            f"<b>Traveler:</b> {escape(document.traveler_name)}",
            f"<b>Email:</b> {escape(document.traveler_email)}",
            f"<b>Booking ID:</b> {document.trip_id}",
            f"<b>Status:</b> {document.state.value}",
            f"<b>Total Cost:</b> {format_money(document.total_cost, settings.default_currency)}",
        ]
        if document.payment:
            summary.append(f"<b>Payment Intent:</b> {document.payment.payment_intent_id}")
        for line in summary:
            elements.append(Paragraph(line, styles["Normal"]))
        elements.append(Spacer(1, 12))

        confirmations = document.confirmations
        if confirmations.flight:
            elements.extend(self._flight_section(confirmations.flight, styles))
        if confirmations.hotel:
            elements.extend(self._hotel_section(confirmations.hotel, styles))
        if confirmations.activities:
            elements.extend(self._activity_confirmations(confirmations.activities, styles))

        # Planned activities from the trip option itself
        if document.activities:
            elements.append(Paragraph("<b>Planned Activities</b>", styles["Heading2"]))
            data = [["Activity", "Category", "Duration", "Price"]]
            for activity in document.activities:
                data.append([
                    Paragraph(escape(activity.name), styles["Normal"]),
                    activity.category.value.title(),
                    f"{activity.duration} min",
                    format_money(activity.price, settings.default_currency),
                ])
            table = Table(data, colWidths=[3 * inch, 1.2 * inch, 0.9 * inch, 1.3 * inch])
            table.setStyle(_TABLE_STYLE)
            elements.append(table)
            elements.append(Spacer(1, 12))

        if document.payment:
            elements.extend(self._payment_section(document.payment, styles))

        elements.append(Spacer(1, 24))
        elements.append(Paragraph(
            f"Need help? Contact us at {settings.support_email}. "
            f"Generated {datetime.now().strftime('%b %d, %Y %H:%M')}.",
            styles["Italic"],
        ))

        try:
            doc.build(elements)
        except (LayoutError, ValueError) as e:
            raise DependencyFailure(f"PDF rendering failed for trip option {document.trip_id}: {e}") from e
        logger.info(f"Rendered itinerary PDF for trip option {document.trip_id}")
        return buf.getvalue()

    def _flight_section(self, flight: FlightConfirmation, styles) -> list:
        lines = [
            f"<b>Confirmation Code:</b> {escape(flight.confirmation_code)}",
            f"<b>Airline:</b> {escape(flight.provider)}",
            f"<b>Departure:</b> {_fmt_date(flight.departure_time)}",
        ]
        if flight.pnr:
            lines.append(f"<b>PNR:</b> {escape(flight.pnr)}")
        if flight.booking_reference:
            lines.append(f"<b>Booking Reference:</b> {escape(flight.booking_reference)}")
        if flight.return_time:
            lines.append(f"<b>Return:</b> {_fmt_date(flight.return_time)}")
        lines.append(f"<b>Total Price:</b> {format_money(flight.total_price, flight.currency)}")
        lines.append("Please arrive at the airport at least 2 hours before departure.")
        return self._section("Flight Confirmation", lines, styles)

    def _hotel_section(self, hotel: HotelConfirmation, styles) -> list:
        lines = [
            f"<b>{escape(hotel.hotel_name)}</b>",
            f"<b>Confirmation Code:</b> {escape(hotel.confirmation_code)}",
            f"<b>Check-in:</b> {_fmt_date(hotel.check_in)} (after 3:00 PM)",
            f"<b>Check-out:</b> {_fmt_date(hotel.check_out)} (before 11:00 AM)",
            f"<b>Nights:</b> {hotel.nights}",
        ]
        if hotel.booking_reference:
            lines.append(f"<b>Booking Reference:</b> {escape(hotel.booking_reference)}")
        lines.append(f"<b>Total Price:</b> {format_money(hotel.total_price, hotel.currency)}")
        lines.append("Please bring your confirmation code and a valid ID for check-in.")
        return self._section("Hotel Reservation", lines, styles)

    def _activity_confirmations(self, activities: list[ActivityConfirmation], styles) -> list:
        elements = [Paragraph(
            f"<b>Activities &amp; Experiences ({len(activities)})</b>", styles["Heading2"]
        )]
        data = [["Activity", "Confirmation", "Date", "Price"]]
        for activity in activities:
            when = _fmt_date(activity.date)
            if activity.time:
                when = f"{when} at {activity.time}"
            data.append([
                Paragraph(escape(activity.activity_name), styles["Normal"]),
                activity.confirmation_code,
                when,
                format_money(activity.total_price, activity.currency),
            ])
        table = Table(data, colWidths=[2.4 * inch, 1.3 * inch, 1.8 * inch, 1.1 * inch])
        table.setStyle(_TABLE_STYLE)
        elements.append(table)
        elements.append(Spacer(1, 12))
        return elements

    def _payment_section(self, payment: PaymentSummary, styles) -> list:
        return self._section(
            "Payment Summary",
            [
                f"<b>Total Amount Paid:</b> {format_money(payment.amount, payment.currency)}",
                f"<b>Payment ID:</b> {payment.payment_intent_id}",
            ],
            styles,
        )

    def _section(self, title: str, lines: list[str], styles) -> list:
        elements = [Paragraph(f"<b>{title}</b>", styles["Heading2"])]
        for line in lines:
            elements.append(Paragraph(line, styles["Normal"]))
        elements.append(Spacer(1, 12))
        return elements


export_service = ExportService()
