# app/db/repositories/images.py
from typing import Optional, Sequence

from sqlalchemy import func

from app.db.repositories.base import BaseRepository
from app.db.models.images import Image

class ImageRepository(BaseRepository[Image]):
    """CRUD Images + requêtes spécifiques."""
    model = Image

    def get_by_url(self, image_url: str) -> Optional[Image]:
        return self.find_one(image_url=image_url)

    def get_owned(self, owner_id: int, image_url: str) -> Optional[Image]:
        return self.find_one(owner_id=owner_id, image_url=image_url)

    def list_by_owner(self, owner_id: int) -> Sequence[Image]:
        return self.find(owner_id=owner_id)

    def title_exists(self, title: str) -> bool:
        # Insensible à la casse : "Photo.PNG" et "photo.png" sont en collision
        return bool(self.find(func.lower(Image.image_title) == title.lower()))
