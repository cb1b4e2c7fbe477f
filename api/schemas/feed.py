# api/schemas/feed.py
from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class ActivitySchema(BaseModel):
    id: int
    user_id: int
    activity_type: str
    hardcover_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias="event_metadata")
    book_title: Optional[str] = None
    book_author: Optional[str] = None
    book_cover_url: Optional[str] = None
    created_at: datetime
    username: Optional[str] = None
    user_display_name: Optional[str] = None
    user_avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class FeedResponse(BaseModel):
    items: List[ActivitySchema]
