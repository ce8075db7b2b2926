from sqlalchemy import Column, String
from backend.app.db import Base, new_id


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)
    color = Column(String, nullable=False, default="#007bff")
    created_at = Column("createdAt", String, nullable=False, index=True)
