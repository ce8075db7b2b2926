from sqlalchemy import Column, String, Float
from backend.app.db import Base, new_id


class Budget(Base):
    __tablename__ = "budgets"

    id = Column(String, primary_key=True, index=True, default=new_id)
    category = Column(String, index=True, nullable=False)
    amount = Column(Float, nullable=False)
    month = Column(String, nullable=False)
    created_at = Column("createdAt", String, nullable=False, index=True)
