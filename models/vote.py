import enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database import Base


class VoteType(str, enum.Enum):
    UPVOTE = "UPVOTE"
    INVEST_INTEREST = "INVEST_INTEREST"
    WOULD_USE = "WOULD_USE"


class Vote(Base):
    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("user_id", "idea_id", "type", name="uq_vote_user_idea_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    idea_id = Column(Integer, ForeignKey("ideas.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="votes")
    idea = relationship("Idea", back_populates="votes")
