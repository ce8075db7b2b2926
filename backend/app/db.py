import uuid
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def make_engine(database_url: str):
    # SQLite needs same-thread checks off when shared with the FastAPI threadpool
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args)


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine):
    # ✅ Import models *AFTER* Base is defined
    from backend.app.models import transaction_model, budget_model, recurring_model, goal_model, tag_model  # noqa: F401

    # ✅ Create all tables (only needs to run once at startup)
    Base.metadata.create_all(bind=engine)


def new_id():
    return str(uuid.uuid4())
