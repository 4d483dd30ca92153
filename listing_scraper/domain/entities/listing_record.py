from dataclasses import dataclass

AREA_NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class ListingRecord:
    """One listing extracted from a results page. ``link`` is its identity."""

    title: str
    price: str
    area: str
    link: str
