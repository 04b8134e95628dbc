"""
Mark model: The score one Interview received in one Category.
"""
from sqlalchemy import Column, Integer, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from db.session import Base

class Mark(Base):
    __tablename__ = "marks"
    __table_args__ = (
        UniqueConstraint("interview_id", "category_id", name="uq_marks_interview_category"),
    )

    id = Column(Integer, primary_key=True, index=True)
    value = Column(Float, nullable=False, default=0.0)

    # Database-level Links

    # Link to the Interview. If the Interview is deleted, this Mark is deleted.
    interview_id = Column(
        Integer, ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Link to the Category. If the Category is deleted, this Mark is deleted.
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # ORM Relationships
    interview = relationship("Interview", back_populates="marks")
    category = relationship("Category", back_populates="marks")

    def __repr__(self) -> str:
        return f"<Mark {self.id} interview={self.interview_id} category={self.category_id} value={self.value}>"
