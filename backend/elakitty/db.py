from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from elakitty.config import settings

# Base shared by every model module (elakitty.models.base)
from elakitty.models.base import Base

SQLALCHEMY_DATABASE_URL = settings.database_url
_is_sqlite = SQLALCHEMY_DATABASE_URL.startswith("sqlite")

_connect_args = {"check_same_thread": False} if _is_sqlite else {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=_connect_args,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def import_models() -> None:
    # register every model module on Base.metadata
    import elakitty.models.profile  # noqa: F401
    import elakitty.models.auth_session  # noqa: F401
    import elakitty.models.sanctuary  # noqa: F401
    import elakitty.models.caregiver_assignment  # noqa: F401
    import elakitty.models.sighting  # noqa: F401
    import elakitty.models.deletion_log  # noqa: F401


def init_db(bind=None) -> None:
    import_models()
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
