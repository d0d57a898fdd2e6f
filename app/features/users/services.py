"""
➡️ But : Contenir la logique métier des comptes : orchestrer les repos, appliquer des règles, gérer les erreurs.

UserService : inscription (unicité username / email) et lecture de la photo de profil.

IdentityRenamePropagator : renommage + réécriture de toutes les copies dénormalisées du username.

CascadingDeleteOrchestrator : suppression d'un compte et de tout ce qu'il possède (records puis objets du bucket).

🔹 Aucun de ces services n'a de transaction qui couvre plusieurs appels :
l'ordre des écritures et leur idempotence remplacent le rollback.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import (
    EmailInUseError,
    NotFoundError,
    PartialCascadeFailureError,
    PropagationFailedError,
    UsernameTakenError,
)
from app.core.logging import get_logger
from app.db.models.users import User
from app.db.repositories.comments import CommentRepository
from app.db.repositories.follows import FollowRepository
from app.db.repositories.images import ImageRepository
from app.db.repositories.likes import LikeRepository
from app.db.repositories.users import UserRepository
from app.security.password import hash_password
from app.utils.s3 import BlobStore, BlobStoreError

logger = get_logger(__name__)

T = TypeVar("T")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


class UserService:
    def __init__(self, repo: UserRepository, *, settings: Settings = default_settings):
        self.repo = repo
        self.settings = settings

    def get(self, username: str) -> User:
        user = self.repo.get_by_username(username)
        if not user:
            raise NotFoundError("User not found")
        return user

    def profile_pic(self, username: str) -> str:
        return self.get(username).profile_pic_url

    def create(self, username: str, email: str, password: str) -> User:
        if self.repo.get_by_username(username):
            raise UsernameTakenError(username)
        if self.repo.get_by_email(email):
            raise EmailInUseError(email)
        try:
            user = self.repo.create(
                username=username,
                email=email,
                hashed_password=hash_password(password),
                profile_pic_url=self.settings.default_profile_pic_url,
            )
        except IntegrityError:
            # Course perdue contre une inscription concurrente : l'index unique tranche
            raise _uniqueness_error(self.repo, username, email) from None
        logger.info("user.created", username=username)
        return user


def _uniqueness_error(repo: UserRepository, username: str, email: str):
    if repo.get_by_username(username):
        return UsernameTakenError(username)
    return EmailInUseError(email)


class IdentityRenamePropagator:
    """
    Renomme un utilisateur puis propage le nouveau username dans comments,
    followers (follower et followee) et likes.

    Le record User est écrit en premier : un crash en cours de propagation
    laisse des copies périmées (rattrapables en relançant `propagate`),
    jamais un record canonique faux.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        comment_repo: CommentRepository,
        follow_repo: FollowRepository,
        like_repo: LikeRepository,
    ):
        self.users = user_repo
        self.comments = comment_repo
        self.follows = follow_repo
        self.likes = like_repo

    def rename(self, username: str, new_username: Optional[str], new_email: Optional[str]) -> User:
        user = self.users.get_by_username(username)
        if not user:
            raise NotFoundError("User not found in database!")

        old_username = user.username
        updated_username = user.username if _is_blank(new_username) else new_username.strip()
        updated_email = user.email if _is_blank(new_email) else new_email.strip()

        # Contrôles avant toute écriture
        if updated_username != user.username and self.users.get_by_username(updated_username):
            logger.info("rename.rejected", username=username, reason="username_taken")
            raise UsernameTakenError(updated_username)
        if updated_email != user.email and self.users.get_by_email(updated_email):
            logger.info("rename.rejected", username=username, reason="email_in_use")
            raise EmailInUseError(updated_email)

        if updated_username == user.username and updated_email == user.email:
            return user

        try:
            user = self.users.update(
                user,
                username=updated_username,
                email=updated_email,
                updated_at=datetime.utcnow(),
            )
        except IntegrityError:
            raise _uniqueness_error(self.users, updated_username, updated_email) from None

        if updated_username != old_username:
            self.propagate(old_username, updated_username)
        return user

    def propagate(self, old_username: str, new_username: str) -> dict:
        """
        Réécrit toutes les occurrences de `old_username`. Rejouable : une fois
        tout propagé, plus rien ne correspond à l'ancienne valeur (no-op).
        """
        steps: List[Tuple[str, Callable[[str, str], int]]] = [
            ("comments", self.comments.rename_author),
            ("followers", self.follows.rename_follower),
            ("followees", self.follows.rename_followee),
            ("likes", self.likes.rename_liker),
        ]
        counts = {}
        for step, rewrite in steps:
            try:
                counts[step] = rewrite(old_username, new_username)
            except SQLAlchemyError as e:
                logger.error("rename.propagation_failed", step=step, old=old_username, new=new_username, error=str(e))
                raise PropagationFailedError(step, old_username, new_username) from e

        logger.info("rename.propagated", old=old_username, new=new_username, **counts)
        return counts


@dataclass
class CascadeReport:
    username: str
    user_deleted: bool = False
    images: int = 0
    comments: int = 0
    follows: int = 0
    likes: int = 0
    blobs_deleted: List[str] = field(default_factory=list)

    @property
    def records_removed(self) -> int:
        return int(self.user_deleted) + self.images + self.comments + self.follows + self.likes


class CascadingDeleteOrchestrator:
    """
    Supprime un compte et tout ce qu'il possède.

    Ordre : images énumérées, commentaires, arêtes follow, likes, records
    image, record user, puis objets du bucket (photo de profil, images).
    Les records passent avant les objets : un échec côté bucket laisse des
    fichiers orphelins, jamais un record qui pointe vers un fichier supprimé.

    Rien n'est annulé en cas d'échec (PartialCascadeFailureError indique
    l'étape) ; relancer `delete` reprend là où l'on s'était arrêté.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        image_repo: ImageRepository,
        comment_repo: CommentRepository,
        follow_repo: FollowRepository,
        like_repo: LikeRepository,
        blob_store: BlobStore,
        settings: Settings = default_settings,
    ):
        self.users = user_repo
        self.images = image_repo
        self.comments = comment_repo
        self.follows = follow_repo
        self.likes = like_repo
        self.blobs = blob_store
        self.settings = settings

    def delete(self, username: str) -> CascadeReport:
        user = self.users.get_by_username(username)
        if user is None:
            return self._resume(username)

        report = CascadeReport(username=username)
        user_id = user.id
        profile_pic_url = user.profile_pic_url

        images = self._step("enumerate_images", username, lambda: list(self.images.list_by_owner(user_id)))
        image_ids = [img.id for img in images]
        image_objects = [(img.bucket, img.image_title) for img in images]

        report.comments = self._step(
            "delete_comments", username, lambda: self.comments.delete_for_user(username, image_ids)
        )
        report.follows = self._step("delete_follows", username, lambda: self.follows.delete_involving(username))
        report.likes = self._step("delete_likes", username, lambda: self.likes.delete_for_user(username, image_ids))
        report.images = self._step(
            "delete_image_records", username, lambda: self.images.delete_many(owner_id=user_id)
        )
        # Les records image n'existent plus : si la suite échoue, une relance ne
        # retrouvera pas ces objets, ils sont donc signalés comme orphelins.
        image_names = [name for _, name in image_objects]
        self._step("delete_user", username, lambda: self.users.delete(user), orphaned_objects=image_names)
        report.user_deleted = True

        # À partir d'ici les suppressions sont irréversibles : on tente tout
        # puis on signale les objets restés orphelins.
        failures: List[Tuple[str, str]] = []
        profile_pic = self._profile_pic_object(profile_pic_url)
        if profile_pic:
            self._delete_blob("delete_profile_pic", self.settings.PROFILE_PICS_BUCKET, profile_pic, report, failures)
        for bucket, object_name in image_objects:
            self._delete_blob("delete_image_blobs", bucket, object_name, report, failures)

        if failures:
            raise PartialCascadeFailureError(
                failures[0][0], username, orphaned_objects=[name for _, name in failures]
            )

        logger.info(
            "cascade.completed",
            username=username,
            images=report.images,
            comments=report.comments,
            follows=report.follows,
            likes=report.likes,
            blobs=len(report.blobs_deleted),
        )
        return report

    # --------------- Helpers ---------------
    def _resume(self, username: str) -> CascadeReport:
        """
        Le record User est déjà absent : soit il n'a jamais existé, soit une
        exécution précédente s'est arrêtée après l'avoir supprimé. On balaie
        les copies dénormalisées restantes ; s'il n'y a rien, c'est un 404.
        """
        report = CascadeReport(username=username)
        report.comments = self._step("delete_comments", username, lambda: self.comments.delete_for_user(username))
        report.follows = self._step("delete_follows", username, lambda: self.follows.delete_involving(username))
        report.likes = self._step("delete_likes", username, lambda: self.likes.delete_for_user(username))
        if not report.records_removed:
            raise NotFoundError("User not found")
        logger.info("cascade.resumed", username=username, comments=report.comments, follows=report.follows, likes=report.likes)
        return report

    def _step(
        self,
        step: str,
        username: str,
        action: Callable[[], T],
        *,
        orphaned_objects: Sequence[str] = (),
    ) -> T:
        try:
            result = action()
        except SQLAlchemyError as e:
            logger.error(
                "cascade.step_failed",
                step=step,
                username=username,
                orphaned_objects=list(orphaned_objects),
                error=str(e),
            )
            raise PartialCascadeFailureError(step, username, orphaned_objects=orphaned_objects) from e
        logger.debug("cascade.step_done", step=step, username=username)
        return result

    def _profile_pic_object(self, url: Optional[str]) -> Optional[str]:
        bucket = self.settings.PROFILE_PICS_BUCKET
        name = self.blobs.object_name_from_url(bucket, url) if url else None
        if name is None or name.lower() == self.settings.DEFAULT_PROFILE_PIC.lower():
            return None
        return name

    def _delete_blob(
        self,
        step: str,
        bucket: str,
        object_name: str,
        report: CascadeReport,
        failures: List[Tuple[str, str]],
    ) -> None:
        try:
            self.blobs.delete(bucket, object_name)
        except BlobStoreError as e:
            logger.warning("cascade.blob_orphaned", step=step, bucket=bucket, object_name=object_name, error=str(e))
            failures.append((step, object_name))
            return
        report.blobs_deleted.append(object_name)
