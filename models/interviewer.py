from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from db.session import Base


class Interviewer(Base):
    __tablename__ = "interviewers"

    id = Column(Integer, primary_key=True, index=True)
    fio = Column(String(255), nullable=False, index=True)

    interviews = relationship(
        "Interview", back_populates="interviewer", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Interviewer {self.id} - {self.fio}>"
