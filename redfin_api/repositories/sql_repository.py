"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import select, delete, func

from redfin_api.db.models import Member
from redfin_api.db.session import get_session


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- members --------------------------
    def get_member(self, username: str) -> Optional[Member]:
        username_value = (username or "").strip()
        if not username_value:
            return None
        with get_session() as session:
            stmt = select(Member).where(Member.username == username_value)
            return session.execute(stmt).scalar_one_or_none()

    def create_member(self, username: str) -> Member:
        entity = Member(username=username.strip())
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def list_members(self) -> list[Member]:
        with get_session() as session:
            return session.execute(select(Member).order_by(Member.username)).scalars().all()

    def delete_member(self, username: str) -> None:
        with get_session() as session:
            member = session.execute(
                select(Member).where(Member.username == username)
            ).scalar_one_or_none()
            if member:
                session.delete(member)
                session.commit()

    # -------------------------- preferences --------------------------
    def find_preference(self, model: type, member_id: int) -> Optional[Any]:
        with get_session() as session:
            stmt = select(model).where(model.member_id == member_id)
            return session.execute(stmt).scalars().first()

    def save_preference(self, record: Any) -> Any:
        """Insert a new record or write back a detached one; returns the persisted copy."""
        with get_session() as session:
            merged = session.merge(record)
            session.commit()
            session.refresh(merged)
            return merged

    def count_preferences(self, model: type, member_id: int) -> int:
        with get_session() as session:
            stmt = select(func.count()).select_from(model).where(model.member_id == member_id)
            return int(session.execute(stmt).scalar_one())

    def delete_preference(self, model: type, member_id: int) -> None:
        with get_session() as session:
            session.execute(delete(model).where(model.member_id == member_id))
            session.commit()
