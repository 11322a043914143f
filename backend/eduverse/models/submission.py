import enum

from sqlalchemy import BigInteger, Column, Integer, String, Text

from eduverse.core.database import Base


class SubmissionStatus(str, enum.Enum):
    submitted = "submitted"
    graded = "graded"
    late = "late"


class Submission(Base):
    """A student's hand-in for an assignment"""
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Loose reference to assignments.id; not enforced as a foreign key
    assignment_id = Column(BigInteger, nullable=False, index=True)
    student_id = Column(String, nullable=False, index=True)
    student_name = Column(String, nullable=False)
    submitted_date = Column(String, nullable=False, index=True)
    file_url = Column(Text, nullable=True)
    grade = Column(Integer, nullable=True)  # 0-100
    feedback = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, index=True)
    created_at = Column(String(32), nullable=False)

    def __repr__(self):
        return f"<Submission {self.id} assignment={self.assignment_id} {self.status}>"
