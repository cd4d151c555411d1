"""SQLAlchemy ORM models"""

from sqlalchemy import Column, DateTime, Integer, JSON, PrimaryKeyConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class MonthSnapshotRecord(Base):
    """One month's budget state stored as a JSON payload"""

    __tablename__ = "month_snapshot"
    __table_args__ = (PrimaryKeyConstraint("year", "month"),)

    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
