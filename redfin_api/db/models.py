"""SQLAlchemy models for members, their preferences and sessions."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    ai_company = relationship("MemberAiCompany", uselist=False, back_populates="member", cascade="all,delete-orphan")
    ai_field = relationship("MemberAiField", uselist=False, back_populates="member", cascade="all,delete-orphan")
    job = relationship("MemberJob", uselist=False, back_populates="member", cascade="all,delete-orphan")
    sessions = relationship("UserSession", back_populates="member", cascade="all,delete-orphan")


class MemberAiCompany(Base):
    __tablename__ = "member_ai_companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), unique=True, nullable=False)
    ai_company = Column(String(255), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    member = relationship("Member", back_populates="ai_company")


class MemberAiField(Base):
    __tablename__ = "member_ai_fields"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), unique=True, nullable=False)
    ai_field = Column(String(255), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    member = relationship("Member", back_populates="ai_field")


class MemberJob(Base):
    __tablename__ = "member_jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), unique=True, nullable=False)
    job = Column(String(255), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    member = relationship("Member", back_populates="job")


class UserSession(Base):
    __tablename__ = "sessions"

    token = Column(String(128), primary_key=True)
    username = Column(String(255), ForeignKey("members.username", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    member = relationship("Member", back_populates="sessions")
