"""Run the scraper API: ``python -m listing_scraper``."""
import uvicorn

from listing_scraper.config import settings
from listing_scraper.logging_config import configure_logging


def main() -> None:
    configure_logging(settings.log_level)
    uvicorn.run(
        "listing_scraper.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
