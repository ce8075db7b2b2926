# backend/app/models/transaction_model.py
from sqlalchemy import Column, String, Float, Text
from backend.app.db import Base, new_id


class Transaction(Base):
    __tablename__ = "entries"

    id = Column(String, primary_key=True, index=True, default=new_id)
    amount = Column(Float, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False, default="Umum")
    # kept as the ISO-8601 string the client sent; month filters match on its prefix
    date = Column(String, nullable=False)
    note = Column(Text, nullable=False, default="")
    created_at = Column("createdAt", String, nullable=False, index=True)
