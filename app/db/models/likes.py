from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from app.db.models.base import BaseModelDB


class Like(BaseModelDB, table=True):
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("username", "image_url", name="uq_like_username_image_url"),
    )

    image_id: int = Field(foreign_key="image.id", index=True, nullable=False)
    image_url: str = Field(index=True, nullable=False)  # dénormalisé depuis Image
    username: str = Field(index=True, nullable=False)   # dénormalisé depuis User
