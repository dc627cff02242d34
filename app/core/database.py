from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import config
from app.models import Base

_engines = {}

def get_db_engine(db_url: str = None):
    """Creates the SQLAlchemy engine for a URL once, along with its tables."""
    db_url = db_url or config.db_url
    if db_url not in _engines:
        connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
        engine = create_engine(db_url, connect_args=connect_args)
        Base.metadata.create_all(bind=engine)
        _engines[db_url] = engine
    return _engines[db_url]

def get_session_factory(db_url: str = None):
    return sessionmaker(autocommit=False, autoflush=False, bind=get_db_engine(db_url))

def get_db():
    """Yields a SQLAlchemy session and closes it afterwards."""
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
