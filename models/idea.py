from sqlalchemy import Column, Integer, Boolean, String, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base
from .user import StringList


class Idea(Base):
    __tablename__ = "ideas"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    problem = Column(Text, nullable=False)
    solution = Column(Text, nullable=False)
    target_market = Column(Text, nullable=True)
    business_model = Column(Text, nullable=True)
    tags = Column(StringList, default=list)
    industry = Column(String(100), nullable=True)
    technology = Column(String(100), nullable=True)
    is_public = Column(Boolean, default=True, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    author = relationship("User", back_populates="ideas")
    comments = relationship("Comment", back_populates="idea", cascade="all, delete-orphan")
    votes = relationship("Vote", back_populates="idea", cascade="all, delete-orphan")
