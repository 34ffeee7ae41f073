"""Database engine and session setup."""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def make_session_factory(database_url: str) -> sessionmaker:
    """Create an engine for the given URL and return a session factory bound to it."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are used from FastAPI's worker threads as well as the loop
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, connect_args=connect_args)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
