from app.db.session import SessionLocal


# every request that needs DB gets a fresh session; it is always closed,
# and anything left uncommitted after an error is rolled back.
def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
