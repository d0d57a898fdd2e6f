from sqlmodel import Field
from sqlalchemy import Column, ForeignKey, Integer

from .base import BaseModelDB

class Image(BaseModelDB, table=True):
    """Images postées, stockées dans le bucket images et référencées dans la base."""

    image_url: str = Field(index=True, unique=True, description="URL publique de l'objet (<root>/<bucket>/<objectName>)")
    image_title: str = Field(index=True, description="Nom de l'objet dans le bucket (nom de fichier résolu)")
    bucket: str = Field(description="Nom du bucket")
    mime_type: str = Field(description="Type MIME (image/jpeg, image/png, image/gif)")
    bytes: int = Field(description="Taille en octets")

    owner_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("user.id"),
            nullable=False,
            index=True,
        ),
        description="Propriétaire de l'image",
    )
