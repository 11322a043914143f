import enum

from sqlalchemy import Column, Integer, String

from eduverse.core.database import Base


class SessionType(str, enum.Enum):
    lecture = "lecture"
    lab = "lab"
    tutorial = "tutorial"


class TimetableEntry(Base):
    """One weekly teaching slot"""
    __tablename__ = "timetable"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day = Column(String, nullable=False, index=True)
    time = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    faculty = Column(String, nullable=False)
    room = Column(String, nullable=False)
    type = Column(String(16), nullable=False, index=True)
    created_at = Column(String(32), nullable=False)

    def __repr__(self):
        return f"<TimetableEntry {self.id} {self.day} {self.time}>"
