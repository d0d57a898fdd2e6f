from sqlalchemy.exc import IntegrityError

from app.core.exceptions import DuplicateLikeError, NotFoundError
from app.db.models.likes import Like
from app.db.repositories.images import ImageRepository
from app.db.repositories.likes import LikeRepository
from app.db.repositories.users import UserRepository


class LikeService:
    def __init__(
        self,
        *,
        like_repo: LikeRepository,
        image_repo: ImageRepository,
        user_repo: UserRepository,
    ):
        self.likes = like_repo
        self.images = image_repo
        self.users = user_repo

    def like(self, username: str, image_url: str) -> Like:
        if not self.users.get_by_username(username):
            raise NotFoundError("User not found")
        image = self.images.get_by_url(image_url)
        if not image:
            raise NotFoundError("Image not found in database!")
        if self.likes.exists(username=username, image_url=image.image_url):
            raise DuplicateLikeError("Image already liked")
        try:
            return self.likes.create(image_id=image.id, image_url=image.image_url, username=username)
        except IntegrityError:
            raise DuplicateLikeError("Image already liked") from None

    def unlike(self, username: str, image_url: str) -> None:
        if self.likes.find_one_and_delete(username=username, image_url=image_url) is None:
            raise NotFoundError("Like not found for the user and image")
