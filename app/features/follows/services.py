from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, DuplicateFollowError, NotFoundError
from app.db.models.follows import Follow
from app.db.repositories.follows import FollowRepository
from app.db.repositories.users import UserRepository


class FollowService:
    def __init__(self, *, follow_repo: FollowRepository, user_repo: UserRepository):
        self.follows = follow_repo
        self.users = user_repo

    def follow(self, username: str, followee: str) -> Follow:
        if not self.users.get_by_username(username) or not self.users.get_by_username(followee):
            raise NotFoundError("User not found")
        if username == followee:
            raise ConflictError("You cannot follow yourself")
        if self.follows.exists(follower=username, followee=followee):
            raise DuplicateFollowError("You are already following this user")
        try:
            return self.follows.create(follower=username, followee=followee)
        except IntegrityError:
            raise DuplicateFollowError("You are already following this user") from None

    def unfollow(self, username: str, followee: str) -> None:
        if self.follows.find_one_and_delete(follower=username, followee=followee) is None:
            raise NotFoundError("Follower relationship not found")
