"""
Base repository with common CRUD operations.

Provides a foundation for the collection repositories (skills, education,
goals). Collections are process-wide: rows are not scoped to a user.
"""

from typing import TypeVar, Generic, Optional, List, Type, Any
from sqlmodel import Session, select, SQLModel

T = TypeVar("T", bound=SQLModel)


class BaseRepository(Generic[T]):
    """
    Generic base repository with common CRUD operations.

    Type Parameters:
        T: SQLModel entity type with an integer ``id`` primary key
    """

    def __init__(self, db_session: Session, model_class: Type[T]):
        """
        Initialize repository.

        Args:
            db_session: SQLModel database session
            model_class: The SQLModel class this repository manages
        """
        self.db = db_session
        self.model_class = model_class

    def get_by_id(self, id: Any) -> Optional[T]:
        """
        Get entity by ID.

        Args:
            id: Primary key

        Returns:
            Entity if found, None otherwise
        """
        return self.db.get(self.model_class, id)

    def list_all(self) -> List[T]:
        """
        Get all entities in insertion order.

        Returns:
            List of entities ordered by id
        """
        statement = select(self.model_class).order_by(self.model_class.id)
        return list(self.db.exec(statement).all())

    def create(self, **fields: Any) -> T:
        """
        Create a new entity from field values.

        Args:
            **fields: Column values; ``id`` is always assigned by the database

        Returns:
            Created entity with its new ID
        """
        fields.pop("id", None)
        entity = self.model_class(**fields)
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: T) -> T:
        """
        Persist changes to an existing entity.

        Args:
            entity: Entity with updated values

        Returns:
            Updated entity
        """
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete_by_id(self, id: Any) -> bool:
        """
        Delete entity by ID.

        Deleting an id that does not exist is not an error.

        Args:
            id: Primary key

        Returns:
            True if a row was deleted, False if not found
        """
        entity = self.get_by_id(id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True
