"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l'instance FastAPI (app).

Configure :

CORS (politique par défaut du framework)

titre, version, tags

traduction des erreurs métier en réponses HTTP

contexte de log par requête (méthode, chemin, username)

Inclut les routers (ex : /api/v1/users).

Initialise la base au démarrage (@app.on_event("startup")).

Point unique d'exécution : uvicorn app.main:app --reload.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.openapi import custom_openapi
from app.api.errors import setup_exception_handlers
from app.api.middleware import setup_request_logging
from app.db.session import init_db

from app.api.v1.routers import users, images, comments, likes, followers

import uvicorn

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_tags=[
        {"name": "users", "description": "Comptes : inscription, renommage, photo de profil, suppression"},
        {"name": "images", "description": "Images postées (bucket + métadonnées)"},
        {"name": "comments", "description": "Commentaires sur les images"},
        {"name": "likes", "description": "Likes"},
        {"name": "followers", "description": "Relations follower / followee"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

setup_exception_handlers(app)
setup_request_logging(app)

# Routers
app.include_router(users.router, prefix="/api/v1")
app.include_router(images.router, prefix="/api/v1")
app.include_router(comments.router, prefix="/api/v1")
app.include_router(likes.router, prefix="/api/v1")
app.include_router(followers.router, prefix="/api/v1")

app.openapi = lambda: custom_openapi(app)

# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
