from datetime import datetime, timedelta
from pathlib import Path
import json
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from votecast import create_app
from votecast.extensions import db
from votecast.models import Candidate, Election, FaceData, User, UserRole, Vote

FACE_TEMPLATE = [1.0, 0.0, 0.0, 0.0]


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
            "FACE_EMBEDDING_DIM": 4,
            "FACE_MATCH_THRESHOLD": 0.9,
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


def _make_user(db_session, email, roles=("user",), face=FACE_TEMPLATE):
    user = User(
        full_name=email.split("@")[0].title(),
        email=email,
        password_hash="hashed-password",
        face_registered=face is not None,
    )
    for role in roles:
        user.roles.append(UserRole(role=role))
    if face is not None:
        user.face_data = FaceData(face_encoding=json.dumps(face))
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def make_user(db_session):
    def factory(email, roles=("user",), face=FACE_TEMPLATE):
        return _make_user(db_session, email, roles=roles, face=face)

    return factory


@pytest.fixture()
def admin_user(make_user):
    return make_user("admin1@example.com", roles=("user", "admin"), face=None)


@pytest.fixture()
def voter(make_user):
    return make_user("voter1@example.com")


@pytest.fixture()
def unregistered_voter(make_user):
    return make_user("newcomer@example.com", face=None)


@pytest.fixture()
def make_election(db_session, admin_user):
    def factory(status="active", candidates=("Alice", "Bob"), published=False):
        now = datetime(2026, 10, 1, 9, 0)
        election = Election(
            title="Student Council",
            description="Annual council election",
            start_time=now,
            end_time=now + timedelta(days=1),
            status=status,
            results_published=published,
            created_by=admin_user.id,
        )
        db_session.add(election)
        db_session.flush()
        for name in candidates:
            db_session.add(
                Candidate(election_id=election.id, name=name, party=f"{name} Party")
            )
        db_session.commit()
        return election

    return factory


@pytest.fixture()
def add_ballots(db_session, make_user):
    """Insert ``count`` ballots for ``candidate`` from freshly created voters."""
    created = {"n": 0}

    def factory(election, candidate, count):
        ballots = []
        for _ in range(count):
            created["n"] += 1
            n = created["n"]
            ballot_voter = make_user(f"ballot-voter{n}@example.com")
            ballot = Vote(
                election_id=election.id,
                candidate_id=candidate.id,
                voter_id=ballot_voter.id,
                vote_receipt=f"VR-TEST-{n:05d}",
                face_verified=True,
            )
            db_session.add(ballot)
            ballots.append(ballot)
        db_session.commit()
        return ballots

    return factory


def _login(client, user):
    with client.session_transaction() as session:
        session["_user_id"] = str(user.id)
        session["_fresh"] = True
    return client


@pytest.fixture()
def auth_client(client, voter):
    return _login(client, voter)


@pytest.fixture()
def admin_client(app, admin_user):
    return _login(app.test_client(), admin_user)
