"""SQLAlchemy ORM models for stored conversations and reservations."""
import datetime
from sqlalchemy import Boolean, Column, String, DateTime, JSON
from .database import Base


class Chat(Base):
    __tablename__ = "chats"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    messages = Column(JSON, nullable=False, default=list)  # full transcript, append-only
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    # seats, flightNumber, departure, arrival, passengerName, totalPriceInUSD
    details = Column(JSON, nullable=False)
    has_completed_payment = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
