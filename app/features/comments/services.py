from app.core.exceptions import NotFoundError
from app.db.models.comments import Comment
from app.db.repositories.comments import CommentRepository
from app.db.repositories.images import ImageRepository
from app.db.repositories.users import UserRepository


class CommentService:
    def __init__(
        self,
        *,
        comment_repo: CommentRepository,
        image_repo: ImageRepository,
        user_repo: UserRepository,
    ):
        self.comments = comment_repo
        self.images = image_repo
        self.users = user_repo

    # --------------- Commands ---------------
    def create(self, username: str, *, image_url: str, text: str) -> Comment:
        user = self.users.get_by_username(username)
        if not user:
            raise NotFoundError("User not found")
        image = self.images.get_by_url(image_url)
        if not image:
            raise NotFoundError("Image not found")

        # user_name est dénormalisé : IdentityRenamePropagator le réécrit au renommage
        return self.comments.create(image_id=image.id, user_name=user.username, text=text)

    def edit(self, username: str, *, old_text: str, new_text: str) -> Comment:
        entity = self.comments.find_one(user_name=username, text=old_text)
        if not entity:
            raise NotFoundError("Comment not found")
        return self.comments.update(entity, text=new_text)

    def delete(self, username: str, *, text: str) -> None:
        if self.comments.find_one_and_delete(user_name=username, text=text) is None:
            raise NotFoundError("Comment not found")
