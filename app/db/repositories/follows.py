from sqlalchemy import or_

from app.db.repositories.base import BaseRepository
from app.db.models.follows import Follow


class FollowRepository(BaseRepository[Follow]):
    model = Follow

    def rename_follower(self, old_username: str, new_username: str) -> int:
        return self.update_many({"follower": old_username}, follower=new_username)

    def rename_followee(self, old_username: str, new_username: str) -> int:
        return self.update_many({"followee": old_username}, followee=new_username)

    def delete_involving(self, username: str) -> int:
        """Supprime toutes les arêtes où `username` est follower ou followee."""
        return self.delete_many(or_(Follow.follower == username, Follow.followee == username))
