from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from grouphub.db.base import Base


class TypeGroup(Base):
    __tablename__ = "type_groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    type_group = Column(String(20), nullable=False)  # INTERNO | EXTERNO

    # Relationships
    groups = relationship("Group", back_populates="type_group")


class Representative(Base):
    """External contact of a group. ``user_id`` is set only for registered users."""

    __tablename__ = "representatives"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Relationships
    user = relationship("User")
    group = relationship("Group", back_populates="representative", uselist=False)


class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity = Column(String(255), nullable=False)
    organ = Column(String(255), nullable=False)
    council = Column(String(255), nullable=False)
    acronym = Column(String(255), nullable=False)
    team = Column(String(255), nullable=False)
    unit = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    office_requested = Column(String(255), nullable=True)
    office_indicated = Column(String(255), nullable=True)
    internal_concierge = Column(String(255), nullable=True)
    observations = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default="EM ANDAMENTO", index=True)
    creator_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type_group_id = Column(Integer, ForeignKey("type_groups.id"), nullable=False)
    representative_id = Column(Integer, ForeignKey("representatives.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    creator = relationship("User", back_populates="groups")
    type_group = relationship("TypeGroup", back_populates="groups")
    representative = relationship("Representative", back_populates="group")
    members = relationship("Member", back_populates="group", cascade="all, delete-orphan")
