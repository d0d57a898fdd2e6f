"""
Résolution d'un nom d'objet sans collision.

Le nom proposé est gardé tel quel s'il n'est référencé par aucun record
vivant ; sinon on génère "<uuid4>.<ext>" en minuscules. Aucun effet de bord :
une seule lecture (le prédicat `exists`).
"""

from typing import Callable, Iterable
from uuid import uuid4

from app.utils.images import extension_of


class CollisionSafeNamer:
    def __init__(
        self,
        exists: Callable[[str], bool],
        *,
        reserved: Iterable[str] = (),
        token_factory: Callable[[], str] = lambda: str(uuid4()),
    ):
        self._exists = exists
        self._reserved = {name.lower() for name in reserved}
        self._token_factory = token_factory

    def resolve(self, proposed_name: str) -> str:
        if proposed_name.lower() in self._reserved or self._exists(proposed_name):
            return self.unique_name(proposed_name)
        return proposed_name

    def unique_name(self, proposed_name: str) -> str:
        ext = extension_of(proposed_name)
        if ext is None:
            # Normalement rejeté avant (content_type_for)
            raise ValueError(f"File name has no extension: {proposed_name!r}")
        return f"{self._token_factory()}.{ext}".lower()
