from datetime import datetime
from sqlalchemy import (  # type: ignore
    Column,
    String,
    DateTime,
)

from core.db import Base
from shared.constants import ROLE_USER


class User(Base):
    __tablename__ = "user"

    id = Column(String(64), primary_key=True)
    name = Column(String(256), nullable=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    role = Column(String(16), nullable=False, default=ROLE_USER)
    password_hash = Column(String(128), nullable=True)
    created_at_utc = Column(DateTime, nullable=False, default=datetime.utcnow)
    last_login_utc = Column(DateTime, nullable=True)


__all__ = ["User"]
