"""Seeded event catalog - Pure functions.

The catalog is a fixed set of Cleveland-area events bundled with the app.
Seed dates are relative to "today" so the catalog always looks current;
build_catalog() materializes them for a given day.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

from nearby.core.events import CatalogEvent, GeoPoint, to_iso


# Every seeded event runs this long
SEED_DURATION_HOURS = 3


@dataclass(frozen=True)
class CatalogSeed:
    """Template for one catalog event.

    Attributes:
        id: Stable catalog id
        title: Display title
        category: Event category
        day_offset: Days after today
        hour: Local start hour
        minute: Local start minute
        venue: Venue name
        address: Street address
        lat: Venue latitude
        lng: Venue longitude
        popularity: Popularity score (0-1)
        description: Short description
    """
    id: str
    title: str
    category: str
    day_offset: int
    hour: int
    minute: int
    venue: str
    address: str
    lat: float
    lng: float
    popularity: float
    description: str


CATALOG_SEEDS: tuple[CatalogSeed, ...] = (
    CatalogSeed(
        "cat_001", "Guardians vs Athletics", "sports", 2, 18, 10,
        "Progressive Field", "2401 Ontario St, Cleveland, OH 44115",
        41.4962, -81.6852, 0.92, "MLB Baseball",
    ),
    CatalogSeed(
        "cat_002", "Browns vs Ravens", "sports", 4, 13, 0,
        "Cleveland Browns Stadium", "100 Alfred Lerner Way, Cleveland, OH 44114",
        41.5061, -81.6995, 0.98, "NFL Football",
    ),
    CatalogSeed(
        "cat_003", "Imagine Dragons Live", "concert", 6, 20, 0,
        "Rocket Mortgage FieldHouse", "1 Center Ct, Cleveland, OH 44115",
        41.4965, -81.6881, 0.95, "Arena Rock Concert",
    ),
    CatalogSeed(
        "cat_004", "Downtown Willoughby Bar Crawl", "bar", 1, 21, 0,
        "Downtown Willoughby", "4057 Erie St, Willoughby, OH 44094",
        41.6397, -81.4067, 0.78,
        "Pub crawl featuring 1899, Ballantine, Willoughby Brewing Co.",
    ),
    CatalogSeed(
        "cat_005", "Latest Blockbuster Movie", "general", 0, 19, 30,
        "Atlas Cinemas Eastgate 10", "1970 Mentor Ave, Painesville, OH 44077",
        41.7294, -81.2458, 0.72, "Opening weekend premiere",
    ),
    CatalogSeed(
        "cat_006", "Comedy Night at Hilarities", "general", 3, 20, 0,
        "Hilarities 4th Street Theatre", "2035 E 4th St, Cleveland, OH 44115",
        41.4989, -81.6901, 0.85, "Stand-up comedy showcase",
    ),
    CatalogSeed(
        "cat_007", "Hamilton at Playhouse Square", "general", 7, 19, 30,
        "Playhouse Square", "1501 Euclid Ave, Cleveland, OH 44115",
        41.5014, -81.6789, 0.96, "Broadway Musical",
    ),
    CatalogSeed(
        "cat_008", "Summer Music Festival", "concert", 10, 17, 0,
        "Blossom Music Center", "1145 W Steels Corners Rd, Cuyahoga Falls, OH 44223",
        41.1597, -81.5547, 0.89, "Outdoor festival with multiple artists",
    ),
    CatalogSeed(
        "cat_009", "Museum Gala at University Circle", "general", 5, 18, 0,
        "Cleveland Museum of Art", "11150 East Blvd, Cleveland, OH 44106",
        41.5089, -81.6119, 0.81, "Family-friendly art event",
    ),
    CatalogSeed(
        "cat_010", "Edgewater Summer Festival", "general", 8, 12, 0,
        "Edgewater Park", "6500 Cleveland Memorial Shoreway, Cleveland, OH 44102",
        41.4869, -81.7397, 0.83, "Beach festival with food, music, and activities",
    ),
    CatalogSeed(
        "cat_011", "Jazz Night at Nighttown", "bar", 2, 21, 30,
        "Nighttown", "12387 Cedar Rd, Cleveland Heights, OH 44106",
        41.5043, -81.5841, 0.76, "Live jazz performance",
    ),
    CatalogSeed(
        "cat_012", "Indie Film Premiere", "general", 6, 19, 0,
        "Tower City Cinemas", "230 W Huron Rd, Cleveland, OH 44113",
        41.4982, -81.6942, 0.68, "Independent film screening",
    ),
    CatalogSeed(
        "cat_013", "Guardians vs Yankees", "sports", 12, 19, 10,
        "Progressive Field", "2401 Ontario St, Cleveland, OH 44115",
        41.4962, -81.6852, 0.97, "MLB Baseball",
    ),
    CatalogSeed(
        "cat_014", "Electronic Music Festival", "concert", 9, 22, 0,
        "The Agora Theatre", "5000 Euclid Ave, Cleveland, OH 44103",
        41.5042, -81.6163, 0.84, "EDM showcase with top DJs",
    ),
    CatalogSeed(
        "cat_015", "Cavs Watch Party", "bar", 4, 20, 0,
        "Barley House", "1261 W 58th St, Cleveland, OH 44102",
        41.4846, -81.7178, 0.73, "NBA playoff watch party",
    ),
)


def materialize_seed(seed: CatalogSeed, today: date, tz: tzinfo) -> CatalogEvent:
    """Turn a seed into a concrete event.

    Pure function.

    Args:
        seed: Seed template
        today: Reference day for day_offset
        tz: Timezone of the seed's local start time

    Returns:
        CatalogEvent with UTC ISO timestamps
    """
    day = today + timedelta(days=seed.day_offset)
    start = datetime.combine(day, time(seed.hour, seed.minute), tzinfo=tz)
    end = start + timedelta(hours=SEED_DURATION_HOURS)

    return CatalogEvent(
        id=seed.id,
        title=seed.title,
        category=seed.category,
        start_iso=to_iso(start),
        end_iso=to_iso(end),
        venue=seed.venue,
        address=seed.address,
        geo=GeoPoint(lat=seed.lat, lng=seed.lng),
        popularity=seed.popularity,
        description=seed.description,
    )


def build_catalog(
    today: date,
    tz: tzinfo,
    seeds: tuple[CatalogSeed, ...] = CATALOG_SEEDS,
) -> tuple[CatalogEvent, ...]:
    """Build the read-only catalog for a given day.

    Pure function.
    """
    return tuple(materialize_seed(seed, today, tz) for seed in seeds)
