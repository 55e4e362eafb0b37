from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Text, DateTime, func

from ..database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Link(Base):
    """Short link model"""
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(Text, unique=True, index=True, nullable=False)
    original_url = Column(Text, nullable=False)
    clicks = Column(Integer, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())

    def __repr__(self):
        return f"<Link {self.code} -> {self.original_url}>"
