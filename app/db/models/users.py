"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel (ou Base de SQLAlchemy).

Représente les objets persistés. Ici la table des comptes utilisateurs.

username et email sont uniques côté base : la contrainte est portée par le
moteur, les services ne font qu'un pré-contrôle pour un message d'erreur propre.
"""

from sqlmodel import Field

from .base import BaseModelDB

class User(BaseModelDB, table=True):
    username: str = Field(index=True, unique=True)
    email: str = Field(index=True, unique=True)
    hashed_password: str
    profile_pic_url: str = Field(description="URL publique de l'objet dans le bucket des photos de profil")
