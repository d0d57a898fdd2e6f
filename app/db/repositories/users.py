"""
➡️ But : Encapsuler toutes les opérations de base de données.

UserRepository : CRUD sur la table User + requêtes par username / email.

Ne contient aucune logique métier, juste de la persistance.
"""

# app/db/repositories/users.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import func

from app.db.repositories.base import BaseRepository
from app.db.models.users import User

class UserRepository(BaseRepository[User]):
    """
    Repository pour la table User.
    Hérite du CRUD générique de BaseRepository.
    """
    model = User

    def get_by_username(self, username: str) -> Optional[User]:
        """Retourne un utilisateur par son nom d'utilisateur."""
        return self.find_one(username=username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.find_one(email=email)

    def url_in_use(self, url: str) -> bool:
        """Vrai si une photo de profil pointe déjà sur cette URL (insensible à la casse)."""
        return bool(self.find(func.lower(User.profile_pic_url) == url.lower()))
