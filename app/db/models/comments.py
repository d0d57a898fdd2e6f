from sqlmodel import Field

from app.db.models.base import BaseModelDB


class Comment(BaseModelDB, table=True):
    # user_name est une copie dénormalisée de User.username (pas de user_id) :
    # elle doit être réécrite à chaque renommage.
    image_id: int = Field(foreign_key="image.id", index=True, nullable=False)
    user_name: str = Field(index=True, nullable=False)
    text: str = Field(nullable=False)
