"""Relational storage for short links."""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import func, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .database import Base, build_engine
from .errors import DuplicateKeyError, StoreError
from .models import Link

logger = logging.getLogger(__name__)

# Largest id every supported backend can hold (PostgreSQL INTEGER)
MAX_LINK_ID = 2**31 - 1


class LinkStore:
    """Owns the engine and session factory for the links table.

    Construct once at startup, call ``init()`` before use and ``close()``
    at shutdown. Every operation runs in its own short transaction and
    returns detached ``Link`` rows.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = None
        self._session_factory = None

    def init(self) -> None:
        if self.engine is not None:
            return
        self.engine = build_engine(self.database_url)
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Link store initialized (%s)", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Link store closed")

    @contextmanager
    def session(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise StoreError("Link store is not initialized")
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()

    def create_schema(self) -> None:
        """Create the links table if it does not exist yet"""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreError("Unable to create schema") from e

    def insert_link(self, code: str, original_url: str) -> Link:
        link = Link(code=code, original_url=original_url, clicks=0)
        try:
            with self.session() as db:
                db.add(link)
                db.commit()
                db.refresh(link)
        except IntegrityError as e:
            # The only unique column is code, but confirm before blaming it
            if self.code_exists(code):
                raise DuplicateKeyError(code) from e
            raise StoreError("Unable to insert link") from e
        except SQLAlchemyError as e:
            raise StoreError("Unable to insert link") from e
        return link

    def code_exists(self, code: str) -> bool:
        try:
            with self.session() as db:
                return db.query(Link.id).filter(Link.code == code).first() is not None
        except SQLAlchemyError as e:
            raise StoreError("Unable to look up link") from e

    def list_links(self) -> List[Link]:
        """All links, newest first"""
        try:
            with self.session() as db:
                return (
                    db.query(Link)
                    .order_by(Link.created_at.desc(), Link.id.desc())
                    .all()
                )
        except SQLAlchemyError as e:
            raise StoreError("Unable to list links") from e

    def increment_clicks(self, code: str) -> Optional[Link]:
        """Atomically bump the click counter and return the updated row.

        Returns None without touching anything when the code is unknown.
        """
        try:
            with self.session() as db:
                updated = (
                    db.query(Link)
                    .filter(Link.code == code)
                    .update(
                        {Link.clicks: func.coalesce(Link.clicks, 0) + 1},
                        synchronize_session=False,
                    )
                )
                if not updated:
                    db.rollback()
                    return None
                link = db.query(Link).filter(Link.code == code).one()
                db.commit()
                return link
        except SQLAlchemyError as e:
            raise StoreError("Unable to resolve link") from e

    def delete_link(self, link_id: int) -> bool:
        # Ids outside the column range cannot match a row
        if not 1 <= link_id <= MAX_LINK_ID:
            return False
        try:
            with self.session() as db:
                deleted = (
                    db.query(Link)
                    .filter(Link.id == link_id)
                    .delete(synchronize_session=False)
                )
                db.commit()
                return deleted > 0
        except SQLAlchemyError as e:
            raise StoreError("Unable to delete link") from e

    def ping(self) -> bool:
        try:
            with self.session() as db:
                db.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, StoreError):
            logger.exception("Link store health check failed")
            return False
