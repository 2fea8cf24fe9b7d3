from datetime import datetime
from sqlalchemy import (  # type: ignore
    Column,
    Integer,
    String,
    Text,
    DateTime,
)

from core.db import Base


class AppLog(Base):
    __tablename__ = "app_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp_utc = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    level = Column(String(8), nullable=False)
    message = Column(Text, nullable=False)
    context = Column(Text, nullable=True)
    user_id = Column(String(64), nullable=True, index=True)
    correlation_id = Column(String(64), nullable=True, index=True)


class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp_utc = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    action = Column(String(128), nullable=False, index=True)
    target_user_id = Column(String(64), nullable=True)
    metadata_json = Column(Text, nullable=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(512), nullable=True)
    correlation_id = Column(String(64), nullable=True, index=True)


__all__ = ["AppLog", "AuditLog"]
