from contextlib import contextmanager
from grid_editor.extensions import db

@contextmanager
def transactional():
    """Commit the session on success, roll it back on any error."""
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
