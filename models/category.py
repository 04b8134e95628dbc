"""
Category model: An evaluation criterion interviews are scored against.
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from db.session import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # ORM Relationship:
    # If a Category is deleted, every Mark given for it is deleted.
    marks = relationship(
        "Mark", back_populates="category", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Category {self.id} - {self.name}>"
