from pydantic import BaseModel


class LikeIn(BaseModel):
    image_url: str


class LikeOut(BaseModel):
    id: int
    image_id: int
    image_url: str
    username: str

    model_config = {"from_attributes": True}
