import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BLOB_PUBLIC_ROOT", "https://storage.test")

from types import SimpleNamespace
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.db.session  # noqa: F401  (enregistre toutes les tables)
from app.core.config import settings
from app.db.repositories.comments import CommentRepository
from app.db.repositories.follows import FollowRepository
from app.db.repositories.images import ImageRepository
from app.db.repositories.likes import LikeRepository
from app.db.repositories.users import UserRepository
from app.utils.s3 import BlobStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeS3Client:
    """S3 en mémoire : juste les appels utilisés par BlobStore, avec injection de pannes."""

    def __init__(self):
        self.objects = {}
        self.uploads = {}
        self.deleted = []
        self.fail_operations = set()
        self.fail_delete_keys = set()

    def _check(self, operation: str) -> None:
        if operation in self.fail_operations:
            raise _client_error("InternalError", operation)

    def create_multipart_upload(self, *, Bucket, Key, ContentType):
        self._check("CreateMultipartUpload")
        upload_id = uuid4().hex
        self.uploads[upload_id] = {"bucket": Bucket, "key": Key, "content_type": ContentType, "parts": {}}
        return {"UploadId": upload_id}

    def upload_part(self, *, Bucket, Key, UploadId, PartNumber, Body):
        self._check("UploadPart")
        self.uploads[UploadId]["parts"][PartNumber] = Body
        return {"ETag": f'"etag-{PartNumber}"'}

    def complete_multipart_upload(self, *, Bucket, Key, UploadId, MultipartUpload, IfNoneMatch=None):
        self._check("CompleteMultipartUpload")
        if IfNoneMatch == "*" and (Bucket, Key) in self.objects:
            raise _client_error("PreconditionFailed", "CompleteMultipartUpload")
        upload = self.uploads.pop(UploadId)
        numbers = [p["PartNumber"] for p in MultipartUpload["Parts"]]
        body = b"".join(upload["parts"][n] for n in numbers)
        self.objects[(Bucket, Key)] = {"body": body, "content_type": upload["content_type"]}
        return {"Key": Key}

    def abort_multipart_upload(self, *, Bucket, Key, UploadId):
        self.uploads.pop(UploadId, None)

    def delete_object(self, *, Bucket, Key):
        self._check("DeleteObject")
        if Key in self.fail_delete_keys:
            raise _client_error("InternalError", "DeleteObject")
        self.objects.pop((Bucket, Key), None)
        self.deleted.append((Bucket, Key))
        return {}

    # helpers de test
    def put(self, bucket: str, key: str, body: bytes = PNG_BYTES) -> None:
        self.objects[(bucket, key)] = {"body": body, "content_type": "image/png"}

    def has(self, bucket: str, key: str) -> bool:
        return (bucket, key) in self.objects


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def repos(session):
    return SimpleNamespace(
        users=UserRepository(session),
        images=ImageRepository(session),
        comments=CommentRepository(session),
        follows=FollowRepository(session),
        likes=LikeRepository(session),
    )


@pytest.fixture
def s3():
    return FakeS3Client()


@pytest.fixture
def blob_store(s3):
    # parts de 16 octets pour exercer l'upload en plusieurs morceaux
    return BlobStore(s3, public_root=settings.BLOB_PUBLIC_ROOT, part_size=16)


@pytest.fixture
def make_user(repos, blob_store, s3):
    def _make(username: str, *, profile_pic: str = None):
        if profile_pic:
            s3.put(settings.PROFILE_PICS_BUCKET, profile_pic)
            url = blob_store.public_url(settings.PROFILE_PICS_BUCKET, profile_pic)
        else:
            url = settings.default_profile_pic_url
        return repos.users.create(
            username=username,
            email=f"{username}@example.com",
            hashed_password="not-a-real-hash",
            profile_pic_url=url,
        )

    return _make


@pytest.fixture
def make_image(repos, blob_store, s3):
    def _make(owner, title: str):
        s3.put(settings.IMAGES_BUCKET, title)
        return repos.images.create(
            owner_id=owner.id,
            image_url=blob_store.public_url(settings.IMAGES_BUCKET, title),
            image_title=title,
            bucket=settings.IMAGES_BUCKET,
            mime_type="image/png",
            bytes=len(PNG_BYTES),
        )

    return _make
