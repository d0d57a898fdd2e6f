"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel (ou Base de SQLAlchemy).

Représente les objets persistés. Ici on représente les propriétés communes de toutes les tables (users, images, comments, followers, likes).

Chaque champ = une colonne SQL (avec type, index, clé primaire...).

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.

Chaque table joue le rôle d'une "collection" : aucune transaction ne couvre deux appels de repository.
"""

from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional

class BaseModelDB(SQLModel, table=False):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    
    # created_at = Column(DateTime(timezone=True), server_default=func.now())