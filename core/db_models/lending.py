from datetime import datetime
from sqlalchemy import (  # type: ignore
    CheckConstraint,
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
)
from sqlalchemy.orm import relationship  # type: ignore

from core.db import Base
from shared.constants import LENDING_STATUS_PENDING


class TokenLending(Base):
    __tablename__ = "token_lending"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("user.id"), nullable=False, index=True)
    lend_to_user_id = Column(String(64), ForeignKey("user.id"), nullable=True, index=True)
    person_name = Column(String(256), nullable=False)
    token_count = Column(Integer, nullable=False, default=0)
    total_tokens_lent = Column(Integer, nullable=False, default=0)
    acceptance_status = Column(String(16), nullable=False, default=LENDING_STATUS_PENDING)
    version = Column(Integer, nullable=False, default=1)
    created_at_utc = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at_utc = Column(DateTime, nullable=False, default=datetime.utcnow)

    lender = relationship("User", foreign_keys=[user_id])
    borrower = relationship("User", foreign_keys=[lend_to_user_id])

    __table_args__ = (
        CheckConstraint("total_tokens_lent >= 0", name="ck_token_lending_total_non_negative"),
    )


__all__ = ["TokenLending"]
