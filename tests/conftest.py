import os

TEST_DB_FILE = "test_peer_grading.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# point the app's own engine (used at startup) at the test DB too
os.environ.setdefault("DATABASE_URL", TEST_DB_URL)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.deps import get_db  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.assignment import Assignment  # noqa: E402
from app.models.calculated_penalty import CalculatedPenalty  # noqa: E402
from app.models.late_policy import LatePolicy  # noqa: E402
from app.models.participant import Participant  # noqa: E402
from app.models.user import User  # noqa: E402

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed_data():
    """
    Seed a clean minimal dataset for each test:
    users student1 / student2 / ta1 / instructor1 (password123),
    late policy 1 (max_penalty=5, 1 point per hour),
    assignment 1 using that policy and assignment 2 with no policy.
    """
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(CalculatedPenalty).delete()
        db.query(Participant).delete()
        db.query(Assignment).delete()
        db.query(LatePolicy).delete()
        db.query(User).delete()
        db.commit()

        users = [
            User(id=1, email="student1@example.com", full_name="Student One", role="student"),
            User(id=2, email="student2@example.com", full_name="Student Two", role="student"),
            User(id=3, email="ta1@example.com", full_name="TA One", role="ta"),
            User(id=4, email="instructor1@example.com", full_name="Instructor One", role="instructor"),
        ]
        hashed = hash_password("password123")
        for u in users:
            u.hashed_password = hashed
        db.add_all(users)
        db.commit()

        db.add(
            LatePolicy(
                id=1,
                name="Standard",
                instructor_id=4,
                penalty_per_unit=1,
                penalty_unit="hour",
                max_penalty=5,
            )
        )
        db.commit()

        db.add_all(
            [
                Assignment(id=1, title="Peer Review 1", instructor_id=4, late_policy_id=1),
                Assignment(id=2, title="Peer Review 2", instructor_id=4, late_policy_id=None),
            ]
        )
        db.commit()

        yield
    finally:
        db.close()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def add_participant(db, assignment_id: int, user_id: int, components=(0, 0, 0), **fields) -> Participant:
    """Insert a participant with raw penalty components already set."""
    submission, review, meta_review = components
    p = Participant(
        parent_id=assignment_id,
        user_id=user_id,
        submission_penalty=submission,
        review_penalty=review,
        meta_review_penalty=meta_review,
        total_penalty=0,
        **fields,
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    return p
