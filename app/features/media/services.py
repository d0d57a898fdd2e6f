from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import (
    NotFoundError,
    PartialCascadeFailureError,
    UploadFailedError,
)
from app.core.logging import get_logger
from app.db.models.users import User
from app.db.repositories.comments import CommentRepository
from app.db.repositories.images import ImageRepository
from app.db.repositories.likes import LikeRepository
from app.db.repositories.users import UserRepository
from app.features.media.naming import CollisionSafeNamer
from app.utils.images import content_type_for, validate_bytes
from app.utils.s3 import BlobExistsError, BlobStore, BlobStoreError

logger = get_logger(__name__)


@dataclass
class UploadResult:
    object_name: str
    url: str
    bytes: int
    mime: str
    # Remplacement de photo de profil uniquement :
    # None = rien à supprimer, False = ancien objet resté orphelin (voir orphaned_object)
    superseded_deleted: Optional[bool] = None
    orphaned_object: Optional[str] = None


class BlobUploadCoordinator:
    """
    Écrit un binaire dans le bucket puis le record qui le référence.

    Pas de transaction commune aux deux stores, l'ordre fait la garantie :
      1. type de contenu (extension) validé avant toute écriture
      2. nom sans collision
      3-4. session résumable ouverte puis payload écrit en entier
      5. record écrit seulement après (jamais de record vers un objet absent)
      6. suppression de l'objet remplacé en dernier ; un échec ici laisse un
         orphelin toléré et ne remet pas en cause le nouvel état.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        image_repo: ImageRepository,
        blob_store: BlobStore,
        settings: Settings = default_settings,
    ):
        self.users = user_repo
        self.images = image_repo
        self.blobs = blob_store
        self.settings = settings

    # --------------- Commands ---------------
    def upload_image(self, username: str, file_name: str, payload: bytes) -> UploadResult:
        content_type = content_type_for(file_name)
        size = validate_bytes(payload, max_mb=self.settings.MAX_UPLOAD_MB)
        user = self._get_user(username)
        bucket = self.settings.IMAGES_BUCKET

        namer = CollisionSafeNamer(self.images.title_exists)
        object_name = self._store(bucket, namer, file_name, content_type, payload)
        url = self.blobs.public_url(bucket, object_name)

        try:
            self.images.create(
                owner_id=user.id,
                image_url=url,
                image_title=object_name,
                bucket=bucket,
                mime_type=content_type,
                bytes=size,
            )
        except SQLAlchemyError as e:
            logger.error("upload.metadata_failed", object_name=object_name, orphaned=True, error=str(e))
            raise UploadFailedError("metadata", "Failed to record image", object_name=object_name) from e

        logger.info("upload.image_committed", username=username, object_name=object_name, bytes=size)
        return UploadResult(object_name=object_name, url=url, bytes=size, mime=content_type)

    def replace_profile_pic(self, username: str, file_name: str, payload: bytes) -> UploadResult:
        content_type = content_type_for(file_name)
        size = validate_bytes(payload, max_mb=self.settings.MAX_UPLOAD_MB)
        user = self._get_user(username)
        bucket = self.settings.PROFILE_PICS_BUCKET
        current_url = user.profile_pic_url

        namer = CollisionSafeNamer(
            lambda name: self.users.url_in_use(self.blobs.public_url(bucket, name)),
            reserved=[self.settings.DEFAULT_PROFILE_PIC],
        )
        object_name = self._store(bucket, namer, file_name, content_type, payload)
        url = self.blobs.public_url(bucket, object_name)

        try:
            self.users.update(user, profile_pic_url=url, updated_at=datetime.utcnow())
        except SQLAlchemyError as e:
            logger.error("upload.metadata_failed", object_name=object_name, orphaned=True, error=str(e))
            raise UploadFailedError("metadata", "Failed to update profile picture", object_name=object_name) from e

        result = UploadResult(object_name=object_name, url=url, bytes=size, mime=content_type)
        self._delete_superseded(current_url, result)
        logger.info("upload.profile_pic_committed", username=username, object_name=object_name)
        return result

    # --------------- Helpers ---------------
    def _get_user(self, username: str) -> User:
        user = self.users.get_by_username(username)
        if not user:
            raise NotFoundError("User not found")
        return user

    def _store(
        self,
        bucket: str,
        namer: CollisionSafeNamer,
        file_name: str,
        content_type: str,
        payload: bytes,
    ) -> str:
        object_name = namer.resolve(file_name)
        if object_name != file_name:
            logger.info("upload.name_collision", proposed=file_name, object_name=object_name)

        # Deux tentatives : la seconde seulement si le bucket contient déjà un
        # objet de ce nom sans record (orphelin), avec un nom unique.
        for _ in range(2):
            try:
                session = self.blobs.open_resumable_upload(bucket, object_name, content_type)
            except BlobStoreError as e:
                logger.error("upload.session_failed", object_name=object_name, error=str(e))
                raise UploadFailedError("open_session", "Failed to open upload session", object_name=object_name) from e
            try:
                self.blobs.write(session, payload)
                return object_name
            except BlobExistsError:
                logger.warning("upload.object_exists", object_name=object_name)
                object_name = namer.unique_name(file_name)
            except BlobStoreError as e:
                logger.error("upload.write_failed", object_name=object_name, error=str(e))
                raise UploadFailedError("write", "Failed to upload file", object_name=object_name) from e

        raise UploadFailedError("write", "No free object name", object_name=object_name)

    def _delete_superseded(self, current_url: Optional[str], result: UploadResult) -> None:
        bucket = self.settings.PROFILE_PICS_BUCKET
        old_name = self.blobs.object_name_from_url(bucket, current_url) if current_url else None
        if old_name is None:
            return
        if old_name.lower() == self.settings.DEFAULT_PROFILE_PIC.lower() or old_name == result.object_name:
            return

        try:
            self.blobs.delete(bucket, old_name)
        except BlobStoreError as e:
            logger.warning("upload.superseded_orphaned", object_name=old_name, error=str(e))
            result.superseded_deleted = False
            result.orphaned_object = old_name
            return
        result.superseded_deleted = True


class ImageService:
    """
    Suppression d'une image postée : records d'abord (commentaires, likes,
    image), objet du bucket en dernier.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        image_repo: ImageRepository,
        comment_repo: CommentRepository,
        like_repo: LikeRepository,
        blob_store: BlobStore,
    ):
        self.users = user_repo
        self.images = image_repo
        self.comments = comment_repo
        self.likes = like_repo
        self.blobs = blob_store

    def delete(self, username: str, image_url: str) -> None:
        user = self.users.get_by_username(username)
        if not user:
            raise NotFoundError("User not found")
        image = self.images.get_owned(user.id, image_url)
        if not image:
            raise NotFoundError("Image not found")

        self.comments.delete_for_images([image.id])
        self.likes.delete_for_image(image.id)
        bucket, object_name = image.bucket, image.image_title
        self.images.delete(image)

        try:
            self.blobs.delete(bucket, object_name)
        except BlobStoreError as e:
            logger.error("image.blob_delete_failed", object_name=object_name, error=str(e))
            raise PartialCascadeFailureError(
                "delete_image_blob", username, orphaned_objects=[object_name]
            ) from e
        logger.info("image.deleted", username=username, object_name=object_name)
