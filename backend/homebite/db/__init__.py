import importlib
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from homebite.config import settings

log = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # sync dependencies and routes may run on different threadpool workers
    connect_args["check_same_thread"] = False

engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autoflush=False, bind=engine)
Base = declarative_base()

# every module that declares a table; imported so Base.metadata is complete
MODEL_MODULES = [
    "homebite.models.user",
    "homebite.models.cook_profile",
    "homebite.models.menu_item",
    "homebite.models.cart",
    "homebite.models.cart_line",
    "homebite.models.order",
    "homebite.models.review",
    "homebite.models.idempotency",
]


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    Behavior:
      - If ``reset`` is true (or RESET_DB is set in the environment/.env),
        drop & recreate all tables.
      - Otherwise create missing tables and leave existing ones in place.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset or settings.RESET_DB:
        log.info("Resetting database schema at %s", engine.url)
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized.")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
