"""Generic repository contract and its SQLAlchemy implementation.

``CrudRepository`` declares the operations every entity store offers.
``SQLAlchemyRepository`` implements them for one mapped entity class, running
each call in its own session and transaction.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, Iterable, Iterator, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from utils.logger import setup_logger

from .connection import Database

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of entities plus the counters needed to navigate the rest."""

    content: List[T]
    page: int
    size: int
    total_elements: int = 0
    # Filled from the counters above
    total_pages: int = field(init=False)

    def __post_init__(self):
        self.total_pages = math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def __iter__(self):
        return iter(self.content)

    def __len__(self):
        return len(self.content)


def _check_page_request(page: int, size: int):
    if page < 0:
        raise ValueError(f"Page index must not be negative, got {page}")
    if size < 1:
        raise ValueError(f"Page size must be at least 1, got {size}")


class CrudRepository(ABC, Generic[T]):
    """Create, read, update and delete operations for one entity type."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert a new entity or update the stored one with the same id."""

    @abstractmethod
    def save_all(self, entities: Iterable[T]) -> List[T]:
        """Save every entity in a single transaction."""

    @abstractmethod
    def find_by_id(self, entity_id: int) -> Optional[T]:
        """Return the entity with this id, or None if not found."""

    @abstractmethod
    def exists_by_id(self, entity_id: int) -> bool:
        """Return True if an entity with this id is stored."""

    @abstractmethod
    def find_all(self, page: Optional[int] = None, size: Optional[int] = None) -> Iterator[T]:
        """Lazily iterate over stored entities, optionally one page of them."""

    @abstractmethod
    def find_all_by_id(self, entity_ids: Iterable[int]) -> List[T]:
        """Return the stored entities among the given ids."""

    @abstractmethod
    def find_page(self, page: int, size: int) -> Page[T]:
        """Return one page of entities with pagination counters."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored entities."""

    @abstractmethod
    def delete_by_id(self, entity_id: int) -> bool:
        """Delete by id. Returns True if deleted, False if not found."""

    @abstractmethod
    def delete(self, entity: T) -> bool:
        """Delete the stored counterpart of an entity."""

    @abstractmethod
    def delete_all_by_id(self, entity_ids: Iterable[int]) -> int:
        """Delete every existing entity among the ids, returning how many."""

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every stored entity, returning how many."""


class SQLAlchemyRepository(CrudRepository[T]):
    """CrudRepository backed by a SQLAlchemy mapped class.

    Subclasses set ``entity`` and may override ``_load`` to pull in
    relationships before the session closes.
    """

    entity: Type[T]

    def __init__(self, database: Database):
        """
        Args:
            database: Database providing the session factory
        """
        self.database = database

    def _get_session(self) -> Session:
        """Create a new database session."""
        return self.database.get_session()

    def _load(self, entity: T) -> T:
        """Load whatever the caller will navigate once the session is gone."""
        return entity

    def _attach(self, session: Session, entity: T) -> T:
        if entity.id is None:
            session.add(entity)
            return entity
        return session.merge(entity)

    def save(self, entity: T) -> T:
        session = self._get_session()
        try:
            persisted = self._attach(session, entity)
            session.commit()
            session.refresh(persisted)
            self._load(persisted)
            logger.debug(f"Saved {persisted!r}")
            return persisted
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to save {self.entity.__name__}: {e}")
            raise e
        finally:
            session.close()

    def save_all(self, entities: Iterable[T]) -> List[T]:
        session = self._get_session()
        try:
            persisted = [self._attach(session, entity) for entity in entities]
            session.commit()
            for entity in persisted:
                session.refresh(entity)
                self._load(entity)
            logger.debug(f"Saved {len(persisted)} {self.entity.__tablename__}")
            return persisted
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to save {self.entity.__tablename__}: {e}")
            raise e
        finally:
            session.close()

    def find_by_id(self, entity_id: int) -> Optional[T]:
        session = self._get_session()
        try:
            entity = session.get(self.entity, entity_id)
            if entity:
                self._load(entity)
            return entity
        finally:
            session.close()

    def exists_by_id(self, entity_id: int) -> bool:
        session = self._get_session()
        try:
            return (
                session.query(self.entity.id).filter(self.entity.id == entity_id).first()
                is not None
            )
        finally:
            session.close()

    def find_all(self, page: Optional[int] = None, size: Optional[int] = None) -> Iterator[T]:
        """Iterate over entities ordered by id.

        Nothing is queried until the first item is requested, and every call
        runs the query again.

        Args:
            page: Zero-based page index, requires ``size``
            size: Page size; when omitted every entity is returned

        Raises:
            ValueError: If ``page`` is given without ``size``, is negative,
                or ``size`` is below 1
        """
        if size is None:
            if page is not None:
                raise ValueError(f"Page index {page} given without a page size")
        else:
            _check_page_request(page or 0, size)
        return self._iterate(page, size)

    def _iterate(self, page: Optional[int], size: Optional[int]) -> Iterator[T]:
        session = self._get_session()
        try:
            query = session.query(self.entity).order_by(self.entity.id)
            if size is not None:
                query = query.offset((page or 0) * size).limit(size)
            for entity in query:
                yield self._load(entity)
        finally:
            session.close()

    def find_all_by_id(self, entity_ids: Iterable[int]) -> List[T]:
        ids = list(entity_ids)
        if not ids:
            return []
        session = self._get_session()
        try:
            entities = (
                session.query(self.entity)
                .filter(self.entity.id.in_(ids))
                .order_by(self.entity.id)
                .all()
            )
            for entity in entities:
                self._load(entity)
            return entities
        finally:
            session.close()

    def find_page(self, page: int, size: int) -> Page[T]:
        _check_page_request(page, size)
        session = self._get_session()
        try:
            total = session.query(self.entity).count()
            entities = (
                session.query(self.entity)
                .order_by(self.entity.id)
                .offset(page * size)
                .limit(size)
                .all()
            )
            for entity in entities:
                self._load(entity)
            return Page(content=entities, page=page, size=size, total_elements=total)
        finally:
            session.close()

    def count(self) -> int:
        session = self._get_session()
        try:
            return session.query(self.entity).count()
        finally:
            session.close()

    def delete_by_id(self, entity_id: int) -> bool:
        session = self._get_session()
        try:
            entity = session.get(self.entity, entity_id)
            if entity:
                session.delete(entity)
                session.commit()
                logger.info(f"Deleted {self.entity.__name__} {entity_id}")
                return True
            return False
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to delete {self.entity.__name__} {entity_id}: {e}")
            raise e
        finally:
            session.close()

    def delete(self, entity: T) -> bool:
        if entity.id is None:
            return False
        return self.delete_by_id(entity.id)

    def delete_all_by_id(self, entity_ids: Iterable[int]) -> int:
        ids = list(entity_ids)
        if not ids:
            return 0
        session = self._get_session()
        try:
            entities = session.query(self.entity).filter(self.entity.id.in_(ids)).all()
            for entity in entities:
                session.delete(entity)
            session.commit()
            logger.info(f"Deleted {len(entities)} {self.entity.__tablename__}")
            return len(entities)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to delete {self.entity.__tablename__}: {e}")
            raise e
        finally:
            session.close()

    def delete_all(self) -> int:
        session = self._get_session()
        try:
            # Row by row through the ORM so relationship cascades run
            entities = session.query(self.entity).all()
            for entity in entities:
                session.delete(entity)
            session.commit()
            logger.info(f"Deleted all {len(entities)} {self.entity.__tablename__}")
            return len(entities)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to delete {self.entity.__tablename__}: {e}")
            raise e
        finally:
            session.close()
