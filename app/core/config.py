"""
➡️ But : Centraliser tous les paramètres configurables (nom d'app, base, buckets, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d'environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from app.core.config import settings
print(settings.IMAGES_BUCKET)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code (les noms de buckets
et l'image de profil par défaut étaient codés en dur partout).

Facilite le passage entre environnements (dev / prod / test).
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Gallery-Friends"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "gallery.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # Blob storage (S3 / MinIO)
    # -----------------------------
    S3_ENDPOINT: str = "http://localhost:9000"
    S3_KEY: str = "minioadmin"
    S3_SECRET: str = "minioadmin"
    S3_REGION: str = "us-east-1"

    IMAGES_BUCKET: str = "gallery-friends-images"
    PROFILE_PICS_BUCKET: str = "gallery-friends-profile-pics"
    # Racine publique des objets : <BLOB_PUBLIC_ROOT>/<bucket>/<objectName>
    BLOB_PUBLIC_ROOT: Optional[str] = None
    DEFAULT_PROFILE_PIC: str = "default_profile_pic.png"  # jamais supprimée

    # -----------------------------
    # Uploads
    # -----------------------------
    MAX_UPLOAD_MB: int = 20
    UPLOAD_PART_SIZE_MB: int = 8  # S3 impose >= 5 MB sauf pour la dernière partie

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # URL publique par défaut = endpoint S3 (MinIO en path-style)
        if not self.BLOB_PUBLIC_ROOT:
            object.__setattr__(self, "BLOB_PUBLIC_ROOT", self.S3_ENDPOINT)

    @property
    def default_profile_pic_url(self) -> str:
        return f"{self.BLOB_PUBLIC_ROOT.rstrip('/')}/{self.PROFILE_PICS_BUCKET}/{self.DEFAULT_PROFILE_PIC}"


# Instance globale importable partout
settings = Settings()
