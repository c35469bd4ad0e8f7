"""Static activity catalog by destination.

Stand-in for a live activities provider. Prices are in cents, durations in
minutes, ratings on a 0-5 scale.
"""

from app.schemas.activity import ActivityCandidate, ActivityCategory

# (name, category, duration, price, rating, review_count, description)
_RAW_CATALOG: dict[str, list[tuple]] = {
    "Paris": [
        ("Eiffel Tower Summit Access", "ATTRACTION", 120, 3500, 4.7, 12543,
         "Skip-the-line elevator access to the summit."),
        ("Louvre Museum Guided Tour", "ATTRACTION", 180, 6900, 4.8, 8932,
         "Three-hour guided visit covering the museum's headline works."),
        ("Seine River Dinner Cruise", "EXPERIENCE", 150, 8500, 4.6, 5421,
         "Three-course dinner on the river past the city's landmarks."),
        ("Versailles Palace & Gardens Tour", "TOUR", 480, 9900, 4.9, 7654,
         "Full-day palace and gardens tour with transport from Paris."),
        ("Montmartre Walking Tour", "TOUR", 120, 2900, 4.7, 3210,
         "Sacré-Cœur, the artists' square and the hill's old streets."),
        ("French Cooking Class", "EXPERIENCE", 210, 12500, 4.9, 1876,
         "Hands-on class with a professional chef, meal included."),
        ("Moulin Rouge Show", "ENTERTAINMENT", 120, 11000, 4.5, 4532,
         "Evening cabaret show with champagne."),
    ],
    "Tokyo": [
        ("Tokyo Skytree Admission", "ATTRACTION", 90, 2800, 4.6, 9876,
         "Fast-track entry to the observation decks."),
        ("Sushi Making Class", "EXPERIENCE", 180, 9500, 4.9, 2341,
         "Make sushi with a professional chef, meal included."),
        ("Mt. Fuji Day Trip", "TOUR", 600, 11900, 4.8, 5632,
         "Guided day trip to Mt. Fuji and Lake Kawaguchi."),
        ("Shibuya & Harajuku Walking Tour", "TOUR", 180, 4500, 4.7, 3456,
         "Local guide through both neighborhoods with street food."),
        ("Traditional Tea Ceremony", "EXPERIENCE", 120, 7800, 4.8, 1987,
         "Tea ceremony in a traditional tea house."),
        ("TeamLab Borderless Museum", "ATTRACTION", 150, 3200, 4.9, 8765,
         "Immersive digital art museum."),
    ],
    "London": [
        ("Tower of London & Crown Jewels", "ATTRACTION", 180, 4200, 4.7, 11234,
         "Entry to the Tower with the Crown Jewels exhibition."),
        ("London Eye Fast Track", "ATTRACTION", 45, 3800, 4.6, 15678,
         "Fast-track boarding for one rotation."),
        ("Harry Potter Warner Bros. Studio Tour", "TOUR", 420, 12500, 4.9, 9876,
         "Studio tour with return coach from central London."),
        ("West End Theatre Show", "ENTERTAINMENT", 180, 8500, 4.8, 6543,
         "Stalls seat for a West End musical."),
        ("British Museum Guided Tour", "ATTRACTION", 150, 4900, 4.7, 4321,
         "Guided highlights tour of the museum."),
        ("Thames River Cruise", "EXPERIENCE", 90, 2800, 4.5, 7654,
         "Sightseeing cruise from Westminster to Greenwich."),
    ],
    "New York": [
        ("Statue of Liberty & Ellis Island Tour", "TOUR", 240, 4500, 4.6, 18765,
         "Ferry and guided visit to both islands."),
        ("Empire State Building Observatory", "ATTRACTION", 90, 4200, 4.7, 23456,
         "Entry to the 86th floor observatory."),
        ("Broadway Show Premium Seats", "ENTERTAINMENT", 180, 15000, 4.9, 12345,
         "Premium orchestra seats for a Broadway show."),
        ("Central Park Bike Tour", "TOUR", 120, 5500, 4.8, 6789,
         "Guided bike ride through the park's landmarks."),
        ("MoMA Museum Admission", "ATTRACTION", 150, 2800, 4.7, 9876,
         "General admission to the Museum of Modern Art."),
    ],
    "Barcelona": [
        ("Sagrada Familia Skip-the-Line", "ATTRACTION", 120, 3900, 4.9, 16789,
         "Timed entry to the basilica."),
        ("Park Güell Guided Tour", "TOUR", 120, 3200, 4.7, 8765,
         "Guided visit of Gaudí's park."),
        ("Tapas Walking Tour", "EXPERIENCE", 180, 7900, 4.8, 5432,
         "Evening walk through tapas bars in the Gothic Quarter."),
        ("Flamenco Show with Dinner", "ENTERTAINMENT", 180, 9500, 4.9, 4321,
         "Live flamenco with a set dinner."),
        ("Montserrat Monastery Day Trip", "TOUR", 480, 8500, 4.7, 6543,
         "Day trip to the mountain monastery with cable car."),
    ],
}


def _slug(name: str) -> str:
    return "".join(c if c.isalnum() else "-" for c in name.lower()).strip("-")


def _build(entry: tuple) -> ActivityCandidate:
    name, category, duration, price, rating, review_count, description = entry
    return ActivityCandidate(
        name=name,
        category=ActivityCategory(category),
        description=description,
        duration=duration,
        price=price,
        rating=rating,
        review_count=review_count,
        deep_link=f"https://example.com/activities/{_slug(name)}",
    )


ACTIVITY_CATALOG: dict[str, list[ActivityCandidate]] = {
    destination: [_build(e) for e in entries] for destination, entries in _RAW_CATALOG.items()
}


def get_catalog_for_destination(destination: str | None) -> list[ActivityCandidate]:
    """Exact match first, then case-insensitive. Unknown destinations have no activities."""
    if not destination:
        return []
    if destination in ACTIVITY_CATALOG:
        return list(ACTIVITY_CATALOG[destination])

    normalized = destination.strip().lower()
    for key, activities in ACTIVITY_CATALOG.items():
        if key.lower() == normalized:
            return list(activities)
    return []


def available_destinations() -> list[str]:
    return sorted(ACTIVITY_CATALOG)
