from pydantic import BaseModel, Field


class FollowIn(BaseModel):
    followee_name: str = Field(..., min_length=1)


class FollowOut(BaseModel):
    follower: str
    followee: str

    model_config = {"from_attributes": True}
