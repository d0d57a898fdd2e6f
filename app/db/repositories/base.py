from typing import Any, Dict, Generic, Optional, Sequence, Type, TypeVar
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, select

# Type générique pour le modèle (User, Image, Comment, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base : une table = une "collection".

    👉 Ne contient aucune logique métier.
    👉 Chaque méthode est un aller-retour complet (commit inclus) : aucune
       transaction ne couvre deux appels, les services orchestrent l'ordre.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.

    Correspondance avec le contrat "collection" :
        find_one / find / create (insertOne) / update (updateOne) /
        update_many / delete (deleteOne) / delete_many / find_one_and_delete
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        # Une erreur (ex: violation d'index unique) laisse la session inutilisable
        # tant qu'on n'a pas fait de rollback.
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def find_one(self, **filters) -> Optional[ModelT]:
        """Premier enregistrement dont les champs valent `filters`, ou None."""
        return self.session.exec(select(self.model).filter_by(**filters)).first()

    def find(self, *criteria, **filters) -> Sequence[ModelT]:
        statement = select(self.model).where(*criteria).filter_by(**filters)
        return self.session.exec(statement).all()

    def exists(self, **filters) -> bool:
        return self.find_one(**filters) is not None

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement (insertOne)."""
        entity = self.model(**fields)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> ModelT:
        """Met à jour un enregistrement existant (updateOne)."""
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    def update_many(self, filters: Dict[str, Any], **values) -> int:
        """
        Réécrit `values` sur tous les enregistrements correspondant à `filters`.
        Retourne le nombre de lignes touchées (0 = no-op, donc rejouable).
        """
        statement = update(self.model).filter_by(**filters).values(**values)
        count = self.session.exec(statement).rowcount
        self._commit()
        return count

    # ---------- DELETE ----------

    def delete(self, entity: ModelT) -> None:
        """Supprime un enregistrement (deleteOne)."""
        self.session.delete(entity)
        self._commit()

    def delete_many(self, *criteria, **filters) -> int:
        """
        Supprime tous les enregistrements correspondants.
        `criteria` accepte des expressions SQLAlchemy (or_, in_...), `filters` des égalités.
        """
        if not criteria and not filters:
            raise ValueError("delete_many requires at least one filter")
        statement = delete(self.model).where(*criteria).filter_by(**filters)
        count = self.session.exec(statement).rowcount
        self._commit()
        return count

    def find_one_and_delete(self, **filters) -> Optional[ModelT]:
        entity = self.find_one(**filters)
        if entity is not None:
            self.delete(entity)
        return entity
