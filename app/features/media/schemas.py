from typing import Optional

from pydantic import BaseModel

class UploadOut(BaseModel):
    object_name: str
    url: str
    bytes: int
    mime: str
    superseded_deleted: Optional[bool] = None
    orphaned_object: Optional[str] = None
