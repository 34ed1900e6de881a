# core/db_wait.py
import logging
import time
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)

def wait_for_db(engine, retries: int = 30, sleep_s: float = 1.0) -> None:
    last_err = None
    for attempt in range(1, retries + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return
        except OperationalError as e:
            last_err = e
            logger.warning("database not ready (attempt %d/%d): %s", attempt, retries, e)
            time.sleep(sleep_s)
    raise last_err
