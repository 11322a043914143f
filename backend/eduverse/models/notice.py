import enum

from sqlalchemy import Column, Integer, String, Text

from eduverse.core.database import Base


class AuthorRole(str, enum.Enum):
    faculty = "faculty"
    admin = "admin"


class NoticePriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Notice(Base):
    """Announcement published by faculty or administration"""
    __tablename__ = "notices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String, nullable=False)
    author_role = Column(String(16), nullable=False, index=True)
    department = Column(String, nullable=False, index=True)
    priority = Column(String(16), nullable=False, index=True)
    created_at = Column(String(32), nullable=False, index=True)

    def __repr__(self):
        return f"<Notice {self.id} {self.priority} {self.title!r}>"
