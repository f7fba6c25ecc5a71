# gradelookup/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gradelookup.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite + FastAPI: la sesión puede usarse desde otro hilo del pool
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
