"""
➡️ But : Définir les formats d'entrée/sortie de l'API (couche validation).

UserCreate → corps de requête POST /users

UserSettingsIn → corps PUT /users/{username}/settings (champ vide = pas de changement)

UserOut → réponse de l'API (jamais le hash du mot de passe)
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr
from sqlmodel import SQLModel

class UserCreate(SQLModel):
    username: str
    email: EmailStr
    password: str

class UserSettingsIn(SQLModel):
    username: Optional[str] = None
    email: Optional[str] = None

class UserSettingsOut(BaseModel):
    updated_username: str
    updated_email: str

class UserOut(SQLModel):
    id: int
    username: str
    email: str
    profile_pic_url: str

class ProfilePicOut(BaseModel):
    profile_pic_url: str

class CascadeReportOut(BaseModel):
    username: str
    user_deleted: bool
    images: int
    comments: int
    follows: int
    likes: int
    blobs_deleted: List[str]
