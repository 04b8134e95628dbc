from sqlalchemy import Column, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from db.session import Base


class InterviewComment(Base):
    """Free-text notes an interviewer leaves on one Interview."""

    __tablename__ = "interview_comments"

    id = Column(Integer, primary_key=True, index=True)
    interview_id = Column(
        Integer, ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    experience = Column(Text, nullable=True)
    recommendations = Column(Text, nullable=True)
    last_work = Column(Text, nullable=True)
    comment = Column(Text, nullable=True)

    interview = relationship("Interview", back_populates="comment")

    def __repr__(self) -> str:
        return f"<InterviewComment {self.id} for Interview {self.interview_id}>"
