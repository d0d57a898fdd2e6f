from typing import Iterable

from sqlalchemy import or_

from app.db.repositories.base import BaseRepository
from app.db.models.comments import Comment


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def rename_author(self, old_username: str, new_username: str) -> int:
        return self.update_many({"user_name": old_username}, user_name=new_username)

    def delete_for_images(self, image_ids: Iterable[int]) -> int:
        ids = list(image_ids)
        if not ids:
            return 0
        return self.delete_many(Comment.image_id.in_(ids))

    def delete_for_user(self, username: str, image_ids: Iterable[int] = ()) -> int:
        """Commentaires écrits par `username` ou postés sous une de ses images."""
        ids = list(image_ids)
        if ids:
            return self.delete_many(or_(Comment.user_name == username, Comment.image_id.in_(ids)))
        return self.delete_many(user_name=username)
