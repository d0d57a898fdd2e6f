from typing import Iterable

from sqlalchemy import or_

from app.db.repositories.base import BaseRepository
from app.db.models.likes import Like


class LikeRepository(BaseRepository[Like]):
    model = Like

    def rename_liker(self, old_username: str, new_username: str) -> int:
        return self.update_many({"username": old_username}, username=new_username)

    def delete_for_image(self, image_id: int) -> int:
        return self.delete_many(image_id=image_id)

    def delete_for_user(self, username: str, image_ids: Iterable[int] = ()) -> int:
        """Likes posés par `username` ou portant sur une de ses images."""
        ids = list(image_ids)
        if ids:
            return self.delete_many(or_(Like.username == username, Like.image_id.in_(ids)))
        return self.delete_many(username=username)
