from sqlalchemy import BigInteger, Column, Integer, String, Text

from eduverse.core.database import Base


class Assignment(Base):
    """Coursework posted by faculty for one department and study year"""
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    subject = Column(String, nullable=False, index=True)
    faculty_name = Column(String, nullable=False)
    due_date = Column(String, nullable=False, index=True)  # date string as supplied
    total_marks = Column(BigInteger, nullable=False)
    department = Column(String, nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)  # 1-4
    created_at = Column(String(32), nullable=False)

    def __repr__(self):
        return f"<Assignment {self.id} {self.title!r}>"
