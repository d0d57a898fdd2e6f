# app/api/v1/routers/images.py
from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from app.api.v1.dependencies import get_image_service, get_upload_coordinator
from app.features.media.schemas import UploadOut
from app.features.media.services import BlobUploadCoordinator, ImageService

router = APIRouter(
    prefix="/users/{username}/images",
    tags=["images"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Upload (création)
# -----------------------------
@router.post(
    "",
    summary="Poster une image (bucket → record)",
    description="Reçoit un fichier, le charge dans le bucket images et enregistre ses métadonnées.",
    status_code=status.HTTP_201_CREATED,
    response_model=UploadOut,
)
async def upload_image(
    username: str,
    image: UploadFile = File(...),
    coordinator: BlobUploadCoordinator = Depends(get_upload_coordinator),
):
    raw = await image.read()
    result = coordinator.upload_image(username, image.filename or "", raw)
    return UploadOut(**vars(result))

# -----------------------------
# Suppression
# -----------------------------
@router.delete(
    "",
    summary="Supprimer une image (commentaires + likes + record, puis objet du bucket)",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_image(
    username: str,
    image_url: str = Query(..., description="URL publique de l'image"),
    svc: ImageService = Depends(get_image_service),
):
    svc.delete(username, image_url)
    return None
