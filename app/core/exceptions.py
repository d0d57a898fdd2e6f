"""
Exceptions métier.

Les services lèvent ces exceptions (jamais d'HTTPException), la couche API
les traduit en codes HTTP dans app/main.py.

    GalleryError
       ├── NotFoundError (404)             ← user / image / like / follow absent
       ├── ConflictError (409)
       │      ├── UsernameTakenError
       │      ├── EmailInUseError
       │      ├── DuplicateLikeError
       │      └── DuplicateFollowError
       ├── InvalidUploadError (400)        ← fichier vide ou trop gros
       ├── UnsupportedMediaTypeError (415) ← avant tout appel au blob store
       ├── UploadFailedError (502)
       ├── PropagationFailedError (500)    ← rename : record canonique écrit, copies pas toutes
       └── PartialCascadeFailureError (500)
"""

from typing import Optional, Sequence


class GalleryError(Exception):
    """Base de toutes les erreurs de l'application."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GalleryError, LookupError):
    pass


class ConflictError(GalleryError):
    pass


class UsernameTakenError(ConflictError):
    def __init__(self, username: str):
        super().__init__("Username is already taken")
        self.username = username


class EmailInUseError(ConflictError):
    def __init__(self, email: str):
        super().__init__("Email is already in use")
        self.email = email


class DuplicateLikeError(ConflictError):
    pass


class DuplicateFollowError(ConflictError):
    pass


class InvalidUploadError(GalleryError):
    pass


class UnsupportedMediaTypeError(GalleryError):
    pass


class UploadFailedError(GalleryError):
    """
    Échec d'upload. `stage` indique l'étape : "open_session", "write" ou "metadata".
    Un échec à l'étape "metadata" laisse un objet orphelin dans le bucket (toléré).
    """

    def __init__(self, stage: str, message: str, *, object_name: Optional[str] = None):
        super().__init__(message)
        self.stage = stage
        self.object_name = object_name


class PropagationFailedError(GalleryError):
    """
    Le record User est renommé mais la propagation s'est arrêtée à `step`.
    Relancer IdentityRenamePropagator.propagate(old, new) termine le travail.
    """

    def __init__(self, step: str, old_username: str, new_username: str):
        super().__init__(f"Rename propagation failed at step '{step}'")
        self.step = step
        self.old_username = old_username
        self.new_username = new_username


class PartialCascadeFailureError(GalleryError):
    """
    Une étape de la suppression en cascade a échoué après que les précédentes
    ont été appliquées. Rien n'est annulé : relancer la suppression reprend.
    """

    def __init__(
        self,
        step: str,
        username: str,
        *,
        orphaned_objects: Sequence[str] = (),
    ):
        super().__init__(f"Account deletion for '{username}' failed at step '{step}'")
        self.step = step
        self.username = username
        self.orphaned_objects = list(orphaned_objects)
