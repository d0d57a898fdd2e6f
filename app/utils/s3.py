"""
Client S3/MinIO + opérations du blob store utilisées par les orchestrateurs.

L'upload "résumable" est un upload multipart S3 :
    open_resumable_upload -> create_multipart_upload
    write                 -> upload_part (x N) + complete_multipart_upload
    delete                -> delete_object (idempotent : un objet absent n'est pas une erreur)
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# Erreurs "réseau / service" que les services traduisent en erreurs métier
BlobStoreError = (BotoCoreError, ClientError)


class BlobExistsError(Exception):
    """Un objet du même nom existe déjà dans le bucket (précondition If-None-Match)."""


def make_s3_client(endpoint_url: str):
    cfg = BotoConfig(
        signature_version="s3v4",
        s3={"addressing_style": "path"},
    )
    return boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        region_name=settings.S3_REGION,
        aws_access_key_id=settings.S3_KEY,
        aws_secret_access_key=settings.S3_SECRET,
        config=cfg,
        use_ssl=endpoint_url.startswith("https"),
    )


@lru_cache(maxsize=1)
def make_s3_internal():
    # Un seul client par process, partagé par toutes les requêtes
    return make_s3_client(str(settings.S3_ENDPOINT))


@dataclass(frozen=True)
class UploadSession:
    bucket: str
    object_name: str
    upload_id: str
    content_type: str


class BlobStore:
    def __init__(self, client, *, public_root: str, part_size: int):
        self.client = client
        self.public_root = public_root.rstrip("/")
        self.part_size = part_size

    # ---------- Adresses ----------

    def public_url(self, bucket: str, object_name: str) -> str:
        return f"{self.public_root}/{bucket}/{object_name}"

    def object_name_from_url(self, bucket: str, url: str) -> Optional[str]:
        """
        Clé complète de l'objet derrière `url`, ou None si l'URL ne pointe pas
        dans ce bucket (ex: photo de profil hébergée ailleurs).
        """
        prefix = f"{self.public_root}/{bucket}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix):] or None

    # ---------- Upload ----------

    def open_resumable_upload(self, bucket: str, object_name: str, content_type: str) -> UploadSession:
        resp = self.client.create_multipart_upload(
            Bucket=bucket,
            Key=object_name,
            ContentType=content_type,
        )
        logger.debug("blob.session_opened", bucket=bucket, object_name=object_name)
        return UploadSession(
            bucket=bucket,
            object_name=object_name,
            upload_id=resp["UploadId"],
            content_type=content_type,
        )

    def write(self, session: UploadSession, payload: bytes) -> None:
        """
        Envoie tout le payload puis valide l'objet. En cas d'échec la session
        est abandonnée (aucun objet partiel visible) et l'erreur remonte.
        """
        parts = []
        try:
            for number, offset in enumerate(range(0, len(payload), self.part_size), start=1):
                chunk = payload[offset:offset + self.part_size]
                resp = self.client.upload_part(
                    Bucket=session.bucket,
                    Key=session.object_name,
                    UploadId=session.upload_id,
                    PartNumber=number,
                    Body=chunk,
                )
                parts.append({"ETag": resp["ETag"], "PartNumber": number})

            # If-None-Match: jamais écraser un objet existant
            self.client.complete_multipart_upload(
                Bucket=session.bucket,
                Key=session.object_name,
                UploadId=session.upload_id,
                MultipartUpload={"Parts": parts},
                IfNoneMatch="*",
            )
        except ClientError as e:
            self._abort(session)
            if e.response.get("Error", {}).get("Code") == "PreconditionFailed":
                raise BlobExistsError(session.object_name) from e
            raise
        except BotoCoreError:
            self._abort(session)
            raise
        logger.info(
            "blob.written",
            bucket=session.bucket,
            object_name=session.object_name,
            bytes=len(payload),
            parts=len(parts),
        )

    def _abort(self, session: UploadSession) -> None:
        try:
            self.client.abort_multipart_upload(
                Bucket=session.bucket,
                Key=session.object_name,
                UploadId=session.upload_id,
            )
        except BlobStoreError as e:
            # L'erreur d'origine est relancée par l'appelant ; les parts restantes
            # expirent via la lifecycle policy du bucket.
            logger.warning("blob.abort_failed", object_name=session.object_name, error=str(e))

    # ---------- Delete ----------

    def delete(self, bucket: str, object_name: str) -> None:
        self.client.delete_object(Bucket=bucket, Key=object_name)
        logger.info("blob.deleted", bucket=bucket, object_name=object_name)


def make_blob_store() -> BlobStore:
    return BlobStore(
        make_s3_internal(),
        public_root=settings.BLOB_PUBLIC_ROOT,
        part_size=settings.UPLOAD_PART_SIZE_MB * 1024 * 1024,
    )
