"""SQLAlchemy models for accountbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from accountbook.domain.entities import AccountStatus, TransactionResult, TransactionType

Base = declarative_base()


class AccountUser(Base):
    """Account owner model."""

    __tablename__ = "account_users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="account_user")


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("account_users.id"), nullable=False, index=True)
    account_number = Column(String(10), unique=True, nullable=False)
    status = Column(SAEnum(AccountStatus, name="account_status"), nullable=False)
    balance = Column(BigInteger, nullable=False)
    registered_at = Column(DateTime(timezone=True), nullable=False)
    unregistered_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False)

    __table_args__ = (CheckConstraint("balance >= 0", name="ck_account_balance_non_negative"),)
    # UPDATEs carry "WHERE version = <loaded>"; a stale write raises StaleDataError
    __mapper_args__ = {"version_id_col": version}

    # Relationships
    account_user = relationship("AccountUser", back_populates="accounts")
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Ledger transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(String(32), unique=True, nullable=False)
    transaction_type = Column(SAEnum(TransactionType, name="transaction_type"), nullable=False)
    result = Column(SAEnum(TransactionResult, name="transaction_result"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    balance_snapshot = Column(BigInteger, nullable=False)
    transacted_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
