from collections.abc import Iterable

from listing_scraper.domain.entities.listing_record import ListingRecord


def dedupe_by_link(records: Iterable[ListingRecord]) -> list[ListingRecord]:
    """
    Collapse records sharing a link.

    Each link keeps the position of its first occurrence and the field values
    of its last occurrence.
    """
    by_link: dict[str, ListingRecord] = {}
    for record in records:
        by_link[record.link] = record
    return list(by_link.values())
