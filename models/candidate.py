"""
Candidate model: Stores a person being interviewed.
This is a "parent" table to Interviews.
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from db.session import Base

class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    fio = Column(String(255), nullable=False, index=True)
    born_date = Column(String(50), nullable=True)
    banned = Column(String(255), nullable=True)

    # ORM Relationships:
    # Interviews outlive their Candidate; the database clears their candidate_id.
    interviews = relationship(
        "Interview", back_populates="candidate", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Candidate {self.id} - {self.fio}>"
