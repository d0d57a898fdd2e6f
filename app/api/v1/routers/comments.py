from fastapi import APIRouter, Depends, Query, status

from app.api.v1.dependencies import get_comment_service
from app.features.comments.schemas import CommentCreateIn, CommentOut, CommentUpdateIn
from app.features.comments.services import CommentService

router = APIRouter(
    prefix="/users/{username}/comments",
    tags=["comments"],
    responses={404: {"description": "Not Found"}},
)


@router.post(
    "",
    summary="Commenter une image",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(username: str, payload: CommentCreateIn, svc: CommentService = Depends(get_comment_service)):
    return svc.create(username, image_url=payload.image_url, text=payload.comment)


@router.put(
    "",
    summary="Modifier un commentaire",
    response_model=CommentOut,
)
def edit_comment(username: str, payload: CommentUpdateIn, svc: CommentService = Depends(get_comment_service)):
    return svc.edit(username, old_text=payload.old_comment, new_text=payload.new_comment)


@router.delete(
    "",
    summary="Supprimer un commentaire",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_comment(
    username: str,
    comment: str = Query(..., min_length=1),
    svc: CommentService = Depends(get_comment_service),
):
    svc.delete(username, text=comment)
    return None
