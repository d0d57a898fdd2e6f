from fastapi import APIRouter, Depends, Query, status

from app.api.v1.dependencies import get_follow_service
from app.features.follows.schemas import FollowIn, FollowOut
from app.features.follows.services import FollowService

router = APIRouter(
    prefix="/users/{username}/followers",
    tags=["followers"],
    responses={404: {"description": "Not Found"}},
)


@router.post(
    "",
    summary="Suivre un utilisateur",
    response_model=FollowOut,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Déjà suivi"}},
)
def follow_user(username: str, payload: FollowIn, svc: FollowService = Depends(get_follow_service)):
    return svc.follow(username, payload.followee_name)


@router.delete(
    "",
    summary="Ne plus suivre un utilisateur",
    status_code=status.HTTP_204_NO_CONTENT,
)
def unfollow_user(
    username: str,
    other_username: str = Query(..., min_length=1),
    svc: FollowService = Depends(get_follow_service),
):
    svc.unfollow(username, other_username)
    return None
