from sqlalchemy import Column, String, Float
from backend.app.db import Base, new_id


class Goal(Base):
    __tablename__ = "goals"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=True)
    target_amount = Column("targetAmount", Float, nullable=False)
    current_amount = Column("currentAmount", Float, nullable=False, default=0)
    target_date = Column("targetDate", String, nullable=True)
    created_at = Column("createdAt", String, nullable=False, index=True)
