import enum

from sqlalchemy import Column, Integer, String, Text

from eduverse.core.database import Base


class ResourceType(str, enum.Enum):
    pdf = "pdf"
    video = "video"
    link = "link"
    document = "document"


class Resource(Base):
    """Study material shared with a department"""
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    type = Column(String(16), nullable=False, index=True)
    subject = Column(String, nullable=False, index=True)
    uploaded_by = Column(String, nullable=False)
    upload_date = Column(String, nullable=False, index=True)
    url = Column(Text, nullable=False)
    department = Column(String, nullable=False, index=True)
    created_at = Column(String(32), nullable=False)

    def __repr__(self):
        return f"<Resource {self.id} {self.type} {self.title!r}>"
