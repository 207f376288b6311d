import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, Enum, ARRAY, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from database import Base

# PostgreSQL keeps native arrays; SQLite (tests, local dev) stores them as JSON.
StringList = ARRAY(String).with_variant(JSON(), "sqlite")


class UserRole(str, enum.Enum):
    ENTHUSIAST = "ENTHUSIAST"
    BUILDER = "BUILDER"
    INVESTOR = "INVESTOR"
    MENTOR = "MENTOR"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String(20), unique=True, index=True, nullable=False)
    password = Column(String, nullable=True)  # NULL for Google-only accounts
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    bio = Column(Text, nullable=True)
    avatar = Column(String, nullable=True)
    role = Column(Enum(UserRole), default=UserRole.ENTHUSIAST, nullable=False)
    skills = Column(StringList, default=list)
    interests = Column(StringList, default=list)
    location = Column(String, nullable=True)
    website = Column(String, nullable=True)
    linkedin = Column(String, nullable=True)
    twitter = Column(String, nullable=True)
    github = Column(String, nullable=True)

    is_verified = Column(Boolean, default=False, nullable=False)
    is_premium = Column(Boolean, default=False, nullable=False)
    email_verified = Column(Boolean, default=False, nullable=False)
    google_id = Column(String, unique=True, nullable=True)

    last_active = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    ideas = relationship("Idea", back_populates="author", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="author", cascade="all, delete-orphan")
    votes = relationship("Vote", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")
