"""
Base repository class with common CRUD operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, and_
from app.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Uses async SQLAlchemy for all database operations with proper error handling.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    def default_ordering(self) -> List[Any]:
        """Ordering used by list queries; newest first unless overridden."""
        return [self.model.created_at.desc(), self.model.id.desc()]

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance

        Raises:
            Exception: If database operation fails
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: Integer primary key

        Returns:
            Model instance if found, None otherwise
        """
        try:
            result = await self.db.execute(select(self.model).where(self.model.id == id))
            obj = result.scalar_one_or_none()

            if obj:
                logger.debug(f"Retrieved {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found")

            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by id {id}: {e}")
            raise

    async def get_by_fields(self, **values: Any) -> Optional[ModelType]:
        """
        Get the first record matching all given field values.

        Args:
            **values: Field name to value mapping

        Returns:
            Model instance if found, None otherwise
        """
        try:
            conditions = [getattr(self.model, name) == value for name, value in values.items()]
            query = select(self.model).where(and_(*conditions)).limit(1)
            result = await self.db.execute(query)
            return result.scalars().first()
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by {values}: {e}")
            raise

    async def list_page(
        self,
        conditions: Sequence[Any] = (),
        skip: int = 0,
        limit: int = 10,
        order_by: Optional[Sequence[Any]] = None
    ) -> Tuple[List[ModelType], int]:
        """
        Get one page of records matching all conditions plus the total match count.

        The total comes from a dedicated COUNT query over the same predicate.

        Args:
            conditions: SQLAlchemy boolean expressions, combined with AND
            skip: Number of records to skip
            limit: Maximum number of records to return
            order_by: Ordering expressions; defaults to default_ordering()

        Returns:
            Tuple of (records, total count)
        """
        try:
            query = select(self.model)
            if conditions:
                query = query.where(and_(*conditions))

            query = query.order_by(*(order_by or self.default_ordering()))
            query = query.offset(skip).limit(limit)

            result = await self.db.execute(query)
            objects = list(result.scalars().all())
            total_count = await self.count(conditions)

            logger.debug(f"Retrieved {len(objects)} of {total_count} {self.model.__name__} records")
            return objects, total_count
        except Exception as e:
            logger.error(f"Failed to list {self.model.__name__} records: {e}")
            raise

    async def count(self, conditions: Sequence[Any] = ()) -> int:
        """
        Count records matching all conditions.

        Args:
            conditions: SQLAlchemy boolean expressions, combined with AND

        Returns:
            Number of matching records
        """
        try:
            query = select(func.count()).select_from(self.model)
            if conditions:
                query = query.where(and_(*conditions))

            result = await self.db.execute(query)
            count = result.scalar_one()

            logger.debug(f"Counted {count} {self.model.__name__} records")
            return count
        except Exception as e:
            logger.error(f"Failed to count {self.model.__name__} records: {e}")
            raise

    async def exists(self, id: int) -> bool:
        """
        Check if a record exists by its ID.

        Args:
            id: Integer primary key

        Returns:
            True if record exists, False otherwise
        """
        try:
            query = select(func.count()).select_from(self.model).where(self.model.id == id)
            result = await self.db.execute(query)
            exists = result.scalar_one() > 0
            logger.debug(f"{self.model.__name__} with id {id} exists: {exists}")
            return exists
        except Exception as e:
            logger.error(f"Failed to check existence of {self.model.__name__} {id}: {e}")
            raise

    async def update(self, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """
        Apply field values to a loaded record and persist them.

        Args:
            db_obj: Model instance previously loaded through this session
            obj_in: Dictionary of attribute values to set

        Returns:
            Refreshed model instance

        Raises:
            Exception: If database operation fails
        """
        try:
            for name, value in obj_in.items():
                setattr(db_obj, name, value)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Updated {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {db_obj.id}: {e}")
            raise

    async def delete(self, db_obj: ModelType) -> None:
        """
        Delete a loaded record, cascading along its ORM relationships.

        Args:
            db_obj: Model instance previously loaded through this session

        Raises:
            Exception: If database operation fails
        """
        record_id = db_obj.id
        try:
            await self.db.delete(db_obj)
            await self.db.commit()
            logger.debug(f"Deleted {self.model.__name__} with id: {record_id}")
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {record_id}: {e}")
            raise

    async def delete_where(self, **values: Any) -> int:
        """
        Delete every record matching all given field values in one statement.

        Args:
            **values: Field name to value mapping

        Returns:
            Number of records deleted
        """
        try:
            conditions = [getattr(self.model, name) == value for name, value in values.items()]
            result = await self.db.execute(delete(self.model).where(and_(*conditions)))
            await self.db.commit()

            deleted_count = result.rowcount
            logger.debug(f"Deleted {deleted_count} {self.model.__name__} records matching {values}")
            return deleted_count
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} records matching {values}: {e}")
            raise
