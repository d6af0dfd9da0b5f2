from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from taskhub.config.settings import Settings

DATABASE_URL = Settings.DATABASE_URL


def _connect_args() -> dict:
    # PostgreSQL on Render or similar needs sslmode; SQLite sessions cross threads in FastAPI
    if Settings.is_postgres():
        return {"sslmode": Settings.DATABASE_SSLMODE}
    if Settings.is_sqlite():
        return {"check_same_thread": False}
    return {}


engine = create_engine(DATABASE_URL, connect_args=_connect_args())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Imported wherever a DB session is needed
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
