from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from app.db.models.base import BaseModelDB


class Follow(BaseModelDB, table=True):
    """Arête orientée follower -> followee, dénormalisée par username."""

    __tablename__ = "followers"
    __table_args__ = (
        UniqueConstraint("follower", "followee", name="uq_follow_follower_followee"),
    )

    follower: str = Field(index=True, nullable=False)
    followee: str = Field(index=True, nullable=False)
