"""
Base repository providing common CRUD operations over mapped rows.

Concrete repositories translate between SQLAlchemy rows and domain
aggregates, so nothing outside this package ever sees a row object.
"""

import logging
from abc import abstractmethod
from typing import Generic, TypeVar, List, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, Query
from sqlalchemy.orm.exc import StaleDataError

from config.catalog_config import get_settings
from exceptions import ConcurrentModificationError, DatabaseError, ValidationError
from .specifications import Specification

logger = logging.getLogger(__name__)

RowT = TypeVar('RowT')
AggregateT = TypeVar('AggregateT')


class BaseRepository(Generic[RowT, AggregateT]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.
    """

    #: Human-readable aggregate name used in error messages
    entity_name: str = "Entity"

    def __init__(self, db: Session, model: Type[RowT]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    # ---- mapping hooks -------------------------------------------------

    @abstractmethod
    def _to_domain(self, row: RowT) -> AggregateT:
        """Build an aggregate from a stored row."""

    @abstractmethod
    def _apply(self, row: RowT, aggregate: AggregateT) -> None:
        """Copy an aggregate's state onto a row."""

    # ---- writes --------------------------------------------------------

    def save(self, aggregate: AggregateT) -> AggregateT:
        """
        Insert or update an aggregate.

        Args:
            aggregate: Aggregate to persist; inserted when it has no id or
                its id is not stored yet

        Returns:
            Freshly mapped aggregate reflecting the stored row

        Raises:
            ConcurrentModificationError: If a versioned row changed since the
                aggregate was loaded
            DatabaseError: If a database constraint rejects the row
        """
        aggregate_id = getattr(aggregate, "id", None)
        row = self.db.get(self.model, aggregate_id) if aggregate_id else None

        if row is None:
            row = self.model(id=aggregate_id) if aggregate_id else self.model()
            self._apply(row, aggregate)
            self.db.add(row)
        else:
            self._check_version(row, aggregate)
            self._apply(row, aggregate)

        try:
            self.db.flush()
        except StaleDataError:
            raise ConcurrentModificationError(
                self.entity_name,
                aggregate_id,
                getattr(aggregate, "version", 0),
                None,
            )
        except IntegrityError as e:
            logger.warning(f"Integrity error saving {self.entity_name} {aggregate_id}: {e.orig}")
            raise DatabaseError("save", f"Could not save {self.entity_name}: {e.orig}") from e

        return self._to_domain(row)

    def delete_by_id(self, id: str) -> None:
        """
        Delete a record by its ID. Missing ids are ignored.

        Args:
            id: Primary key value
        """
        row = self.db.get(self.model, id)
        if row is not None:
            self.db.delete(row)
            self.db.flush()

    # ---- reads ---------------------------------------------------------

    def find_by_id(self, id: str) -> Optional[AggregateT]:
        """
        Retrieve an aggregate by its ID.

        Args:
            id: Primary key value

        Returns:
            Aggregate or None if not found
        """
        row = self.db.get(self.model, id)
        return self._to_domain(row) if row is not None else None

    def find_all(self, page: int, page_size: int) -> List[AggregateT]:
        """
        Retrieve one page of all records, oldest first.

        Args:
            page: Zero-based page number
            page_size: Number of records per page
        """
        return self._fetch_page(self.db.query(self.model), page, page_size)

    def count(self) -> int:
        """
        Count total records.

        Returns:
            Total number of records
        """
        return self.db.query(self.model).count()

    def count_matching(self, spec: Specification) -> int:
        """Count records satisfying a specification."""
        return self.db.query(self.model).filter(spec.to_sql_filter()).count()

    def exists_by_id(self, id: str) -> bool:
        """
        Check if a record exists by ID.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        return self.db.query(self.model).filter(self.model.id == id).count() > 0

    # ---- helpers -------------------------------------------------------

    def _fetch_page(self, query: Query, page: int, page_size: int) -> List[AggregateT]:
        validate_page(page, page_size)
        rows = (
            query.order_by(self.model.created_at, self.model.id)
            .offset(page * page_size)
            .limit(page_size)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def _check_version(self, row: RowT, aggregate: AggregateT) -> None:
        stored = getattr(row, "version", None)
        if stored is None:
            return
        expected = getattr(aggregate, "version", 0)
        if expected != stored:
            raise ConcurrentModificationError(self.entity_name, row.id, expected, stored)


def validate_page(page: int, page_size: int) -> None:
    """
    Check paging arguments.

    Raises:
        ValidationError: If page is negative or page_size is out of bounds
    """
    max_page_size = get_settings().max_page_size
    if page < 0:
        raise ValidationError("Page must be non-negative", invalid_fields={"page": page})
    if page_size < 1 or page_size > max_page_size:
        raise ValidationError(
            f"Page size must be between 1 and {max_page_size}",
            invalid_fields={"page_size": page_size},
        )
