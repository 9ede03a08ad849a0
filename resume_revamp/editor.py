"""
Field-by-field edits of a résumé record.

Every function takes a record and returns a new one that differs in exactly
one field or list element. Values are stored verbatim: no trimming, no
validation, empty strings allowed.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Tuple, TypeVar

from .schema_resume import CONTACT_FIELDS, Education, Experience, ResumeRecord

T = TypeVar("T")

NEW_SKILL = "New Skill"
NEW_EXPERIENCE = Experience(
    role="New Role",
    company="Company",
    dates="2023-Present",
    description=("Did cool things",),
)
NEW_EDUCATION = Education(degree="Degree", school="School", dates="2020 - 2024")

_SCALAR_FIELDS = ("full_name", "job_title", "summary")
_EXPERIENCE_FIELDS = ("role", "company", "dates", "location")
_EDUCATION_FIELDS = ("degree", "school", "dates", "location")


def _check(name: str, allowed: Tuple[str, ...]) -> None:
    if name not in allowed:
        raise KeyError(f"not an editable field: {name!r}")


def _index(items: Tuple[T, ...], i: int) -> int:
    if not 0 <= i < len(items):
        raise IndexError(f"index {i} out of range for {len(items)} items")
    return i


def _put(items: Tuple[T, ...], i: int, value: T) -> Tuple[T, ...]:
    i = _index(items, i)
    return items[:i] + (value,) + items[i + 1:]


def _drop(items: Tuple[T, ...], i: int) -> Tuple[T, ...]:
    i = _index(items, i)
    return items[:i] + items[i + 1:]


# ───────────────────────────────────────── scalars ──
def set_field(record: ResumeRecord, name: str, value: str) -> ResumeRecord:
    _check(name, _SCALAR_FIELDS)
    return replace(record, **{name: value})


def set_contact(record: ResumeRecord, name: str, value: str) -> ResumeRecord:
    _check(name, CONTACT_FIELDS)
    return replace(record, contact=replace(record.contact, **{name: value}))


# ───────────────────────────────────────── skills ──
def set_skill(record: ResumeRecord, i: int, value: str) -> ResumeRecord:
    return replace(record, skills=_put(record.skills, i, value))


def add_skill(record: ResumeRecord) -> ResumeRecord:
    return replace(record, skills=record.skills + (NEW_SKILL,))


def remove_skill(record: ResumeRecord, i: int) -> ResumeRecord:
    return replace(record, skills=_drop(record.skills, i))


# ───────────────────────────────────────── experience ──
def set_experience(record: ResumeRecord, i: int, name: str, value: str) -> ResumeRecord:
    _check(name, _EXPERIENCE_FIELDS)
    entry = record.experience[_index(record.experience, i)]
    return replace(record, experience=_put(record.experience, i, replace(entry, **{name: value})))


def set_experience_description(record: ResumeRecord, i: int, blob: str) -> ResumeRecord:
    """One bullet per line; a trailing newline keeps its empty bullet."""
    entry = record.experience[_index(record.experience, i)]
    bullets = tuple(blob.split("\n"))
    return replace(record, experience=_put(record.experience, i, replace(entry, description=bullets)))


def add_experience(record: ResumeRecord) -> ResumeRecord:
    return replace(record, experience=record.experience + (NEW_EXPERIENCE,))


def remove_experience(record: ResumeRecord, i: int) -> ResumeRecord:
    return replace(record, experience=_drop(record.experience, i))


# ───────────────────────────────────────── education ──
def set_education(record: ResumeRecord, i: int, name: str, value: str) -> ResumeRecord:
    _check(name, _EDUCATION_FIELDS)
    entry = record.education[_index(record.education, i)]
    return replace(record, education=_put(record.education, i, replace(entry, **{name: value})))


def add_education(record: ResumeRecord) -> ResumeRecord:
    return replace(record, education=record.education + (NEW_EDUCATION,))


def remove_education(record: ResumeRecord, i: int) -> ResumeRecord:
    return replace(record, education=_drop(record.education, i))
