from fastapi import APIRouter, Depends, Query, status

from app.api.v1.dependencies import get_like_service
from app.features.likes.schemas import LikeIn, LikeOut
from app.features.likes.services import LikeService

router = APIRouter(
    prefix="/users/{username}/likes",
    tags=["likes"],
    responses={404: {"description": "Not Found"}},
)


@router.post(
    "",
    summary="Liker une image",
    response_model=LikeOut,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Image déjà likée"}},
)
def like_image(username: str, payload: LikeIn, svc: LikeService = Depends(get_like_service)):
    return svc.like(username, payload.image_url)


@router.delete(
    "",
    summary="Retirer un like",
    status_code=status.HTTP_204_NO_CONTENT,
)
def unlike_image(
    username: str,
    image_url: str = Query(...),
    svc: LikeService = Depends(get_like_service),
):
    svc.unlike(username, image_url)
    return None
