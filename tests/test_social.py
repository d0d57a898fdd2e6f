"""Inscription, images, commentaires, likes et follows."""

import pytest

from app.core.config import settings
from app.core.exceptions import (
    ConflictError,
    DuplicateFollowError,
    DuplicateLikeError,
    EmailInUseError,
    NotFoundError,
    PartialCascadeFailureError,
    UsernameTakenError,
)
from app.features.comments.services import CommentService
from app.features.follows.services import FollowService
from app.features.likes.services import LikeService
from app.features.media.services import ImageService
from app.features.users.services import UserService
from app.security.password import verify_password

IMAGES = settings.IMAGES_BUCKET


class TestUserService:
    def test_create_uses_default_picture_and_hashes_password(self, repos):
        user = UserService(repos.users).create("alice", "alice@example.com", "s3cret")

        assert user.profile_pic_url == settings.default_profile_pic_url
        assert user.hashed_password != "s3cret"
        assert verify_password("s3cret", user.hashed_password)

    def test_duplicates_are_rejected(self, repos, make_user):
        make_user("alice")
        svc = UserService(repos.users)
        with pytest.raises(UsernameTakenError):
            svc.create("alice", "fresh@example.com", "pw")
        with pytest.raises(EmailInUseError):
            svc.create("alicia", "alice@example.com", "pw")

    def test_profile_pic(self, repos, make_user):
        make_user("alice", profile_pic="me.png")
        assert UserService(repos.users).profile_pic("alice").endswith("/me.png")
        with pytest.raises(NotFoundError):
            UserService(repos.users).profile_pic("ghost")


class TestImageService:
    @pytest.fixture
    def svc(self, repos, blob_store):
        return ImageService(
            user_repo=repos.users,
            image_repo=repos.images,
            comment_repo=repos.comments,
            like_repo=repos.likes,
            blob_store=blob_store,
        )

    def test_delete_removes_comments_likes_record_and_object(self, svc, repos, s3, make_user, make_image):
        alice = make_user("alice")
        make_user("bob")
        image = make_image(alice, "a.png")
        repos.comments.create(image_id=image.id, user_name="bob", text="hi")
        repos.likes.create(image_id=image.id, image_url=image.image_url, username="bob")

        svc.delete("alice", image.image_url)

        assert repos.images.find() == []
        assert repos.comments.find() == []
        assert repos.likes.find() == []
        assert not s3.has(IMAGES, "a.png")

    def test_cannot_delete_someone_elses_image(self, svc, repos, s3, make_user, make_image):
        make_user("alice")
        image = make_image(make_user("bob"), "b.png")

        with pytest.raises(NotFoundError):
            svc.delete("alice", image.image_url)
        assert s3.has(IMAGES, "b.png")

    def test_blob_failure_is_reported(self, svc, repos, s3, make_user, make_image):
        image = make_image(make_user("alice"), "a.png")
        s3.fail_delete_keys.add("a.png")

        with pytest.raises(PartialCascadeFailureError) as exc_info:
            svc.delete("alice", image.image_url)
        assert exc_info.value.orphaned_objects == ["a.png"]
        assert repos.images.find() == []


class TestComments:
    @pytest.fixture
    def svc(self, repos):
        return CommentService(comment_repo=repos.comments, image_repo=repos.images, user_repo=repos.users)

    def test_create_edit_delete(self, svc, repos, make_user, make_image):
        image = make_image(make_user("alice"), "a.png")
        make_user("bob")

        comment = svc.create("bob", image_url=image.image_url, text="nice")
        assert comment.user_name == "bob" and comment.image_id == image.id

        edited = svc.edit("bob", old_text="nice", new_text="very nice")
        assert edited.text == "very nice"

        svc.delete("bob", text="very nice")
        assert repos.comments.find() == []

    def test_missing_targets(self, svc, make_user):
        make_user("bob")
        with pytest.raises(NotFoundError):
            svc.create("bob", image_url="https://nowhere/x.png", text="?")
        with pytest.raises(NotFoundError):
            svc.delete("bob", text="never written")


class TestLikes:
    @pytest.fixture
    def svc(self, repos):
        return LikeService(like_repo=repos.likes, image_repo=repos.images, user_repo=repos.users)

    def test_like_once(self, svc, make_user, make_image):
        image = make_image(make_user("alice"), "a.png")
        make_user("bob")

        like = svc.like("bob", image.image_url)
        assert like.image_id == image.id

        with pytest.raises(DuplicateLikeError):
            svc.like("bob", image.image_url)

    def test_unlike(self, svc, repos, make_user, make_image):
        image = make_image(make_user("alice"), "a.png")
        svc.like("alice", image.image_url)

        svc.unlike("alice", image.image_url)
        assert repos.likes.find() == []
        with pytest.raises(NotFoundError):
            svc.unlike("alice", image.image_url)


class TestFollows:
    @pytest.fixture
    def svc(self, repos):
        return FollowService(follow_repo=repos.follows, user_repo=repos.users)

    def test_follow_once(self, svc, make_user):
        make_user("alice")
        make_user("bob")

        edge = svc.follow("alice", "bob")
        assert (edge.follower, edge.followee) == ("alice", "bob")

        with pytest.raises(DuplicateFollowError):
            svc.follow("alice", "bob")

    def test_follow_rules(self, svc, make_user):
        make_user("alice")
        with pytest.raises(NotFoundError):
            svc.follow("alice", "ghost")
        with pytest.raises(ConflictError):
            svc.follow("alice", "alice")

    def test_unfollow(self, svc, repos, make_user):
        make_user("alice")
        make_user("bob")
        svc.follow("alice", "bob")

        svc.unfollow("alice", "bob")
        assert repos.follows.find() == []
        with pytest.raises(NotFoundError):
            svc.unfollow("alice", "bob")
