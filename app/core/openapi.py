"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) ajoute au schéma généré par FastAPI les conventions
de l'API (codes d'erreur, reprise des opérations partielles).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "Backend Gallery-Friends : comptes, images, commentaires, follows et likes.\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- 409 : username / email déjà pris, like ou follow en double.\n"
            "- 500 avec `step` : opération partielle (renommage ou suppression de compte) ;"
            " la même requête peut être rejouée sans risque pour terminer.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
