from sqlalchemy import Column, String, Float, Text
from backend.app.db import Base, new_id


class RecurringTemplate(Base):
    """A repeating income/expense pattern. Never expanded into entries."""

    __tablename__ = "recurring"

    id = Column(String, primary_key=True, index=True, default=new_id)
    amount = Column(Float, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False, default="Umum")
    frequency = Column(String, nullable=False)
    note = Column(Text, nullable=False, default="")
    created_at = Column("createdAt", String, nullable=False, index=True)
