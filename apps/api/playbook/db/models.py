import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Table,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from playbook.domain import Vote

from .session import Base


def uuid4_str():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


pickup_line_tags = Table(
    "pickup_line_tags",
    Base.metadata,
    Column("pickup_line_id", Uuid(as_uuid=False), ForeignKey("pickup_lines.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid(as_uuid=False), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    username = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(Uuid(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Id assigned by the search engine when the tag document was indexed
    search_document_id = Column(String(255), nullable=True)

    __table_args__ = (Index("ix_tags_user_id", "user_id"),)


class PickupLine(Base):
    __tablename__ = "pickup_lines"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(Uuid(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    visible = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", lazy="selectin")
    tags = relationship("Tag", secondary=pickup_line_tags, lazy="selectin")

    __table_args__ = (Index("ix_pickup_lines_user_id", "user_id"),)


class Reaction(Base):
    """One user's reaction to one pickup line; the ground truth for statistics."""
    __tablename__ = "reactions"

    pickup_line_id = Column(
        Uuid(as_uuid=False), ForeignKey("pickup_lines.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(Uuid(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    starred = Column(Boolean, nullable=False, default=False)
    vote = Column(String(100), nullable=False, default=Vote.NONE.value)
