from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from grouphub.db.base import Base


class TypeUser(Base):
    __tablename__ = "type_users"

    # Primary key doubles as the Role key (1=ADMIN ... 5=VIEWER)
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False, unique=True)

    # Relationships
    users = relationship("User", back_populates="type_user")
