from pydantic import BaseModel, Field, computed_field, ConfigDict
from datetime import datetime
from shortlink_app.config import settings


class URLBase(BaseModel):
    url: str = Field(..., description="The original URL to be shortened")


class URLCreate(URLBase):
    pass


class URLUpdate(URLBase):
    pass


class URLResponse(URLBase):
    """Response schema that serializes the SQLAlchemy URL model

    - from_attributes=True reads straight from model attributes
    - short_url is derived from the configured base URL
    """
    id: int
    short_code: str
    access_count: int
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def short_url(self) -> str:
        return f"{settings.base_url}/{self.short_code}"

    model_config = ConfigDict(from_attributes=True)


class URLStats(BaseModel):
    short_code: str
    url: str
    access_count: int
    created_at: datetime
    last_updated: datetime
    created_days_ago: int

    model_config = ConfigDict(from_attributes=True)
