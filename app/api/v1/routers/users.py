"""
➡️ But : Définir les endpoints des comptes.

Routes minces : résolution des paramètres, appel du service, schéma de sortie.
Les erreurs métier sont traduites en codes HTTP par app/api/errors.py.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status

from app.api.v1.dependencies import (
    get_user_service,
    get_rename_propagator,
    get_delete_orchestrator,
    get_upload_coordinator,
)
from app.features.media.schemas import UploadOut
from app.features.media.services import BlobUploadCoordinator
from app.features.users.schemas import (
    CascadeReportOut,
    ProfilePicOut,
    UserCreate,
    UserOut,
    UserSettingsIn,
    UserSettingsOut,
)
from app.features.users.services import (
    CascadingDeleteOrchestrator,
    IdentityRenamePropagator,
    UserService,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not Found"}},
)

@router.post(
    "",
    summary="Créer un compte",
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={409: {"description": "Username ou email déjà utilisé"}},
)
def create_user(payload: UserCreate, svc: UserService = Depends(get_user_service)):
    return svc.create(username=payload.username, email=payload.email, password=payload.password)

@router.get(
    "/{username}/profile-pic",
    summary="URL de la photo de profil",
    response_model=ProfilePicOut,
)
def get_profile_pic(username: str, svc: UserService = Depends(get_user_service)):
    return ProfilePicOut(profile_pic_url=svc.profile_pic(username))

@router.post(
    "/{username}/profile-pic",
    summary="Remplacer la photo de profil (bucket → record → suppression de l'ancienne)",
    response_model=UploadOut,
    responses={415: {"description": "Extension non supportée"}, 502: {"description": "Échec d'upload"}},
)
async def replace_profile_pic(
    username: str,
    profile_pic: UploadFile = File(...),
    coordinator: BlobUploadCoordinator = Depends(get_upload_coordinator),
):
    raw = await profile_pic.read()
    result = coordinator.replace_profile_pic(username, profile_pic.filename or "", raw)
    return UploadOut(**vars(result))

@router.put(
    "/{username}/settings",
    summary="Changer username / email (propagé aux commentaires, follows et likes)",
    response_model=UserSettingsOut,
    responses={409: {"description": "Username ou email déjà utilisé"}},
)
def update_settings(
    username: str,
    payload: UserSettingsIn,
    propagator: IdentityRenamePropagator = Depends(get_rename_propagator),
):
    user = propagator.rename(username, payload.username, payload.email)
    return UserSettingsOut(updated_username=user.username, updated_email=user.email)

@router.delete(
    "/{username}",
    summary="Supprimer un compte et tout ce qu'il possède",
    response_model=CascadeReportOut,
    responses={500: {"description": "Suppression partielle : relancer la requête"}},
)
def delete_user(
    username: str,
    orchestrator: CascadingDeleteOrchestrator = Depends(get_delete_orchestrator),
):
    report = orchestrator.delete(username)
    return CascadeReportOut(**vars(report))
