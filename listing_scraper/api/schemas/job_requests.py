from pydantic import BaseModel, ConfigDict, Field


class ScrapeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Optional here so a missing value is reported as 400, not a 422 validation error
    origin_url: str | None = Field(default=None, alias="originUrl")
    limit_pages: int | None = None
