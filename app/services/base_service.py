from typing import Type, TypeVar, Optional
from pydantic import BaseModel
from sqlalchemy.orm import Session

from utils.exceptions import NotFoundError

ModelType = TypeVar('ModelType')


class BaseService:
    def __init__(self, model: Type[ModelType]):
        self.model = model

    def create(self, db: Session, db_obj: ModelType) -> ModelType:
        """
        Persist a new record

        Args:
            db: Database session
            db_obj: The unsaved model instance

        Returns:
            The created model instance, refreshed from the database
        """
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, id: int) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_or_404(self, db: Session, id: int, message: str = "Not found") -> ModelType:
        db_obj = self.get(db, id)
        if db_obj is None:
            raise NotFoundError(message)
        return db_obj

    def update(self, db: Session, db_obj: ModelType, obj_in: BaseModel) -> ModelType:
        """Apply the fields the client actually sent."""
        for key, value in obj_in.model_dump(exclude_unset=True).items():
            setattr(db_obj, key, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, db_obj: ModelType) -> None:
        db.delete(db_obj)
        db.commit()
