"""
Business logic shared by the blueprints.

Functions here raise ``varmepumpe.errors`` exceptions and never build
responses.
"""
from contextlib import contextmanager

from varmepumpe import db


@contextmanager
def unit_of_work():
    """Commit everything done in the block at once, or roll all of it back"""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
