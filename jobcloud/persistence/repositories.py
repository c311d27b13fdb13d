"""Data access layer for postings.

Repositories encapsulate database operations and return domain models rather
than ORM models.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobcloud.domain.models import Posting

from .exceptions import DataIntegrityError, PersistenceError
from .schema import PostingModel

logger = logging.getLogger(__name__)


class PostingRepository:
    """Repository for posting queries and writes."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, posting_id: str) -> Optional[Posting]:
        """Retrieve a posting by primary key.

        Returns:
            Posting if found, None otherwise

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            posting_model = self.session.get(PostingModel, posting_id)
            return posting_model.to_domain() if posting_model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving posting {posting_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve posting: {e}") from e

    def get_by_crawled_date(self, date_key: str) -> List[Posting]:
        """All postings crawled on a date, most recently ingested first.

        Args:
            date_key: Crawl date as YYYY-MM-DD (exact match)

        Returns:
            List of postings (empty list if none found)

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(PostingModel)
                .where(PostingModel.crawled_date == date_key)
                .order_by(PostingModel.created_at.desc())
            )
            posting_models = self.session.execute(stmt).scalars().all()
            return [posting_model.to_domain() for posting_model in posting_models]

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving postings for {date_key}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve postings: {e}") from e

    def get_crawled_dates(self) -> List[str]:
        """Crawled-date column of every row (duplicates included).

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = select(PostingModel.crawled_date)
            return list(self.session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving crawled dates: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve crawled dates: {e}") from e

    def upsert(self, posting: Posting) -> Posting:
        """Insert a new posting or overwrite an existing one with the same id.

        Raises:
            DataIntegrityError: On constraint violations
            PersistenceError: If database error occurs
        """
        try:
            existing = self.session.get(PostingModel, posting.id)

            if existing:
                existing.apply(posting)
                self.session.flush()
                return existing.to_domain()

            posting_model = PostingModel.from_domain(posting)
            self.session.add(posting_model)
            self.session.flush()
            return posting_model.to_domain()

        except IntegrityError as e:
            logger.error(f"Integrity error upserting posting {posting.id}: {e}", exc_info=True)
            raise DataIntegrityError(
                f"Failed to upsert posting due to constraint violation: {e}"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting posting {posting.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert posting: {e}") from e

    def bulk_upsert(self, postings: Sequence[Posting]) -> List[Posting]:
        """Upsert several postings inside the current transaction."""
        return [self.upsert(posting) for posting in postings]

    def count(self) -> int:
        """Total number of stored postings.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = select(func.count()).select_from(PostingModel)
            return int(self.session.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            logger.error(f"Error counting postings: {e}", exc_info=True)
            raise PersistenceError(f"Failed to count postings: {e}") from e
