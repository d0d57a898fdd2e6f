"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_rename_propagator() : crée un IdentityRenamePropagator à partir d'une session DB.

get_blob_store() : blob store construit sur le client S3 partagé du process.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à remplacer dans les tests (app.dependency_overrides).
"""

from fastapi import Depends
from sqlmodel import Session

from app.db.session import get_session

from app.db.repositories.users import UserRepository
from app.db.repositories.images import ImageRepository
from app.db.repositories.comments import CommentRepository
from app.db.repositories.follows import FollowRepository
from app.db.repositories.likes import LikeRepository

from app.features.users.services import (
    UserService,
    IdentityRenamePropagator,
    CascadingDeleteOrchestrator,
)
from app.features.media.services import BlobUploadCoordinator, ImageService
from app.features.comments.services import CommentService
from app.features.likes.services import LikeService
from app.features.follows.services import FollowService

from app.utils.s3 import BlobStore, make_blob_store


# -----------------------------
# Blob store
# -----------------------------
def get_blob_store() -> BlobStore:
    return make_blob_store()


# -----------------------------
# Repositories
# -----------------------------
def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)

def get_image_repository(session: Session = Depends(get_session)) -> ImageRepository:
    return ImageRepository(session)

def get_comment_repository(session: Session = Depends(get_session)) -> CommentRepository:
    return CommentRepository(session)

def get_follow_repository(session: Session = Depends(get_session)) -> FollowRepository:
    return FollowRepository(session)

def get_like_repository(session: Session = Depends(get_session)) -> LikeRepository:
    return LikeRepository(session)


# -----------------------------
# Users
# -----------------------------
def get_user_service(user_repo: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(user_repo)

def get_rename_propagator(
    user_repo: UserRepository = Depends(get_user_repository),
    comment_repo: CommentRepository = Depends(get_comment_repository),
    follow_repo: FollowRepository = Depends(get_follow_repository),
    like_repo: LikeRepository = Depends(get_like_repository),
) -> IdentityRenamePropagator:
    return IdentityRenamePropagator(
        user_repo=user_repo,
        comment_repo=comment_repo,
        follow_repo=follow_repo,
        like_repo=like_repo,
    )

def get_delete_orchestrator(
    user_repo: UserRepository = Depends(get_user_repository),
    image_repo: ImageRepository = Depends(get_image_repository),
    comment_repo: CommentRepository = Depends(get_comment_repository),
    follow_repo: FollowRepository = Depends(get_follow_repository),
    like_repo: LikeRepository = Depends(get_like_repository),
    blob_store: BlobStore = Depends(get_blob_store),
) -> CascadingDeleteOrchestrator:
    return CascadingDeleteOrchestrator(
        user_repo=user_repo,
        image_repo=image_repo,
        comment_repo=comment_repo,
        follow_repo=follow_repo,
        like_repo=like_repo,
        blob_store=blob_store,
    )


# -----------------------------
# Media services
# -----------------------------
def get_upload_coordinator(
    user_repo: UserRepository = Depends(get_user_repository),
    image_repo: ImageRepository = Depends(get_image_repository),
    blob_store: BlobStore = Depends(get_blob_store),
) -> BlobUploadCoordinator:
    return BlobUploadCoordinator(user_repo=user_repo, image_repo=image_repo, blob_store=blob_store)

def get_image_service(
    user_repo: UserRepository = Depends(get_user_repository),
    image_repo: ImageRepository = Depends(get_image_repository),
    comment_repo: CommentRepository = Depends(get_comment_repository),
    like_repo: LikeRepository = Depends(get_like_repository),
    blob_store: BlobStore = Depends(get_blob_store),
) -> ImageService:
    return ImageService(
        user_repo=user_repo,
        image_repo=image_repo,
        comment_repo=comment_repo,
        like_repo=like_repo,
        blob_store=blob_store,
    )


# -----------------------------
# Social
# -----------------------------
def get_comment_service(
    comment_repo: CommentRepository = Depends(get_comment_repository),
    image_repo: ImageRepository = Depends(get_image_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> CommentService:
    return CommentService(comment_repo=comment_repo, image_repo=image_repo, user_repo=user_repo)

def get_like_service(
    like_repo: LikeRepository = Depends(get_like_repository),
    image_repo: ImageRepository = Depends(get_image_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> LikeService:
    return LikeService(like_repo=like_repo, image_repo=image_repo, user_repo=user_repo)

def get_follow_service(
    follow_repo: FollowRepository = Depends(get_follow_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> FollowService:
    return FollowService(follow_repo=follow_repo, user_repo=user_repo)
