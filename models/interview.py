"""
Interview model: The central table.
Links a Candidate to the Interviewer who talked to them.
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from db.session import Base

class Interview(Base):
    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(String(50), nullable=True, index=True) # Kept as free-form string
    post = Column(String(255), nullable=True, index=True)
    result = Column(String(255), nullable=True)
    time = Column(String(50), nullable=True)

    # Database-level Links

    # Link to the Candidate. If the Candidate is deleted, this Interview is kept
    # with no candidate.
    candidate_id = Column(
        Integer, ForeignKey("candidates.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Link to the Interviewer. An Interviewer with Interviews cannot be deleted.
    interviewer_id = Column(
        Integer, ForeignKey("interviewers.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    # ORM Relationships
    candidate = relationship("Candidate", back_populates="interviews")
    interviewer = relationship("Interviewer", back_populates="interviews")

    # If this Interview is deleted, all its Marks are also deleted.
    marks = relationship(
        "Mark", back_populates="interview", cascade="all, delete-orphan", passive_deletes=True
    )

    # At most one comment per Interview; it goes away with the Interview.
    comment = relationship(
        "InterviewComment",
        back_populates="interview",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Interview {self.id} - CandID {self.candidate_id} InterviewerID {self.interviewer_id}>"
