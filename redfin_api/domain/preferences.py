"""Preference kinds: which table, column and payload key each one uses."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from redfin_api.db.models import MemberAiCompany, MemberAiField, MemberJob


@dataclass(frozen=True)
class PreferenceKind:
    """One member preference stored as a single string column."""

    name: str
    model: type
    field: str
    payload_key: str
    path: str

    def build(self, member_id: int, value: str) -> Any:
        return self.model(member_id=member_id, **{self.field: value})

    def apply(self, record: Any, value: str) -> None:
        setattr(record, self.field, value)

    def value_of(self, record: Any) -> str | None:
        return getattr(record, self.field)


AI_COMPANY = PreferenceKind(
    name="ai_company",
    model=MemberAiCompany,
    field="ai_company",
    payload_key="aiCompany",
    path="/ai-company",
)
AI_FIELD = PreferenceKind(
    name="ai_field",
    model=MemberAiField,
    field="ai_field",
    payload_key="aiField",
    path="/ai-field",
)
JOB_INTEREST = PreferenceKind(
    name="job",
    model=MemberJob,
    field="job",
    payload_key="interest",
    path="/job-interest",
)

PREFERENCE_KINDS: tuple[PreferenceKind, ...] = (AI_COMPANY, AI_FIELD, JOB_INTEREST)
_BY_NAME = {kind.name: kind for kind in PREFERENCE_KINDS}


def get_kind(name: str) -> PreferenceKind:
    """Return the registered kind; unknown names raise KeyError."""
    return _BY_NAME[name]
