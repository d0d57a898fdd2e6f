from typing import Dict, Optional

import filetype

from app.core.exceptions import InvalidUploadError, UnsupportedMediaTypeError

# Seules extensions acceptées, et le Content-Type qu'on envoie au bucket
CONTENT_TYPES: Dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
}


def extension_of(file_name: str) -> Optional[str]:
    """
    Extension = tout ce qui suit le dernier point, en minuscules.
    "archive.tar.PNG" -> "png" ; "photo" ou "photo." -> None
    """
    base, dot, ext = file_name.rpartition(".")
    if not dot or not base or not ext:
        return None
    return ext.lower()


def content_type_for(file_name: str) -> str:
    """
    Lève InvalidUploadError si le nom contient un séparateur de chemin (le nom
    devient tel quel la clé de l'objet), UnsupportedMediaTypeError si
    l'extension est absente ou hors allow-list.
    """
    if "/" in file_name or "\\" in file_name:
        raise InvalidUploadError(f"Invalid file name: {file_name!r}")
    ext = extension_of(file_name)
    if ext is None:
        raise UnsupportedMediaTypeError(f"File name has no extension: {file_name!r}")
    try:
        return CONTENT_TYPES[ext]
    except KeyError:
        raise UnsupportedMediaTypeError(f"Invalid file type: .{ext}") from None


def validate_bytes(file_bytes: bytes, *, max_mb: int) -> int:
    """
    Contrôle taille + contenu réel via 'filetype'.
    Retourne la taille en octets. Lève InvalidUploadError (taille) ou UnsupportedMediaTypeError.
    """
    size = len(file_bytes)
    if size == 0:
        raise InvalidUploadError("Fichier vide")
    if size > max_mb * 1024 * 1024:
        raise InvalidUploadError(f"Taille invalide (max {max_mb} MB)")

    kind = filetype.guess(file_bytes)
    # Contenu non reconnu : on se fie à l'extension déclarée
    if kind is not None and kind.mime not in CONTENT_TYPES.values():
        raise UnsupportedMediaTypeError(f"Type non autorisé: {kind.mime}")
    return size
