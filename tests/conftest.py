"""
Shared fixtures: in-memory database, seeded ledger, recording logger.
"""

import os

os.environ.setdefault("TOKEN_LEDGER_ENV", "testing")

from typing import Any, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.db import init_schema  # noqa: E402
from core.models import TokenLending, User  # noqa: E402
from domain.models.session import Role, UserSession  # noqa: E402
from services.ports import Logger  # noqa: E402
from utils.auth import hash_password  # noqa: E402


ALICE_ID = "user-alice"
BOB_ID = "user-bob"
ADMIN_ID = "user-admin"
PASSWORD = "correct horse battery staple"


# =============================================================================
# FAKES
# =============================================================================


class RecordingLogger(Logger):
    """Logger that keeps every entry in memory."""

    def __init__(self):
        self.entries: List[Dict[str, Any]] = []
        self.audits: List[Dict[str, Any]] = []

    def _record(self, level: str, message: str, context: Optional[dict], user_id: Optional[str]) -> None:
        self.entries.append({"level": level, "message": message, "context": context, "user_id": user_id})

    def info(self, message, context=None, user_id=None):
        self._record("info", message, context, user_id)

    def warn(self, message, context=None, user_id=None):
        self._record("warn", message, context, user_id)

    def error(self, message, context=None, user_id=None):
        self._record("error", message, context, user_id)

    def debug(self, message, context=None, user_id=None):
        self._record("debug", message, context, user_id)

    def audit(self, action, context, user_id):
        assert user_id, "audit entries must be attributed"
        self.audits.append({"action": action, "context": dict(context or {}), "user_id": user_id})

    def actions(self) -> List[str]:
        return [a["action"] for a in self.audits]


# =============================================================================
# DATABASE
# =============================================================================


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_schema(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture(scope="session")
def password_hash():
    return hash_password(PASSWORD)


@pytest.fixture
def seeded(session_factory, password_hash):
    """
    Users alice, bob (role user) and admin, plus four lending rows:

    1: alice -> bob (linked), pending,  3 of 5
    2: alice -> "Carla" (free text), accepted, 2 of 4
    3: bob -> alice (linked), accepted, 1 of 1
    4: alice -> bob (linked), declined, 1 of 1
    """
    session = session_factory()
    session.add_all([
        User(id=ALICE_ID, name="Alice Example", email="alice@example.com", role="user",
             password_hash=password_hash),
        User(id=BOB_ID, name="Bob Builder", email="bob@example.com", role="user",
             password_hash=password_hash),
        User(id=ADMIN_ID, name="Ada Admin", email="admin@example.com", role="admin",
             password_hash=password_hash),
    ])
    session.add_all([
        TokenLending(id=1, user_id=ALICE_ID, lend_to_user_id=BOB_ID, person_name="Bob",
                     token_count=3, total_tokens_lent=5, acceptance_status="pending", version=1),
        TokenLending(id=2, user_id=ALICE_ID, lend_to_user_id=None, person_name="Carla",
                     token_count=2, total_tokens_lent=4, acceptance_status="accepted", version=1),
        TokenLending(id=3, user_id=BOB_ID, lend_to_user_id=ALICE_ID, person_name="Alice",
                     token_count=1, total_tokens_lent=1, acceptance_status="accepted", version=1),
        TokenLending(id=4, user_id=ALICE_ID, lend_to_user_id=BOB_ID, person_name="Bob",
                     token_count=1, total_tokens_lent=1, acceptance_status="declined", version=1),
    ])
    session.commit()
    session.close()
    return session_factory


@pytest.fixture
def recording_logger():
    return RecordingLogger()


# =============================================================================
# PRINCIPALS
# =============================================================================


@pytest.fixture
def alice():
    return UserSession(user_id=ALICE_ID, email="alice@example.com", role=Role.USER)


@pytest.fixture
def bob():
    return UserSession(user_id=BOB_ID, email="bob@example.com", role=Role.USER)


@pytest.fixture
def admin():
    return UserSession(user_id=ADMIN_ID, email="admin@example.com", role=Role.ADMIN)
