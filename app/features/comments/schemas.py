from datetime import datetime

from pydantic import BaseModel, Field


class CommentCreateIn(BaseModel):
    image_url: str
    comment: str = Field(..., min_length=1)


class CommentUpdateIn(BaseModel):
    old_comment: str
    new_comment: str = Field(..., min_length=1)


class CommentOut(BaseModel):
    id: int
    image_id: int
    user_name: str
    text: str
    created_at: datetime

    model_config = {"from_attributes": True}
