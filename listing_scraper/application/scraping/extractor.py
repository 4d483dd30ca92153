"""Turns rendered anchor elements into listing records by matching their text."""
import re
from collections.abc import Iterable

from listing_scraper.application.interfaces.page_driver import AnchorSnapshot
from listing_scraper.domain.entities.listing_record import AREA_NOT_AVAILABLE, ListingRecord

# 300,000 or 1,250,000.50; at least one comma group is required
PRICE_PATTERN = re.compile(r"[0-9]{1,3}(?:,[0-9]{3})+(?:\.[0-9]+)?")
AREA_PATTERN = re.compile(r"([0-9]+)\s*م²")

# Links to category pages ("properties in ...") carry prices too
DEFAULT_EXCLUDED_MARKERS: tuple[str, ...] = ("عقارات في",)

MAX_TITLE_LENGTH = 100


def extract_listing(
    anchor: AnchorSnapshot,
    excluded_markers: Iterable[str] = DEFAULT_EXCLUDED_MARKERS,
) -> ListingRecord | None:
    """Return the record for a single anchor, or None if it is not a listing."""
    text = anchor.text or ""
    if any(marker in text for marker in excluded_markers):
        return None

    price_match = PRICE_PATTERN.search(text)
    if price_match is None:
        return None

    area_match = AREA_PATTERN.search(text)
    return ListingRecord(
        title=anchor.heading or text.split("\n")[0][:MAX_TITLE_LENGTH],
        price=price_match.group(0),
        area=area_match.group(1) if area_match else AREA_NOT_AVAILABLE,
        link=anchor.href,
    )


def extract_listings(
    anchors: Iterable[AnchorSnapshot],
    excluded_markers: Iterable[str] = DEFAULT_EXCLUDED_MARKERS,
) -> list[ListingRecord]:
    """Map anchors to listing records in page order, dropping non-listings."""
    markers = tuple(excluded_markers)
    records: list[ListingRecord] = []
    for anchor in anchors:
        record = extract_listing(anchor, markers)
        if record is not None:
            records.append(record)
    return records
