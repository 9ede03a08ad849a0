"""
Canonical résumé record.

The record is immutable: every edit builds a new value with
dataclasses.replace() and the session swaps the reference. Sequences are
tuples so a record can be shared between the editor, the renderer and an
in-flight export without copying.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .errors import RecordDecodeError

# wire shape shown to the model (camelCase, empty values – no placeholders)
RESUME_SCHEMA = {
    "fullName": "",
    "jobTitle": "",
    "contact": {"email": "", "phone": "", "location": "", "linkedin": "", "website": ""},
    "summary": "",
    "skills": [],
    "experience": [
        {"role": "", "company": "", "location": "", "dates": "", "description": [""]}
    ],
    "education": [{"degree": "", "school": "", "location": "", "dates": ""}],
    "projects": [{"name": "", "description": "", "link": ""}],
}

CONTACT_FIELDS = ("email", "phone", "location", "linkedin", "website")


@dataclass(frozen=True)
class Contact:
    email: str
    phone: str = ""
    location: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class Experience:
    role: str
    company: str
    dates: str
    description: Tuple[str, ...] = ()
    location: Optional[str] = None


@dataclass(frozen=True)
class Education:
    degree: str
    school: str
    dates: str
    location: Optional[str] = None


@dataclass(frozen=True)
class Project:
    name: str
    description: str
    link: Optional[str] = None


@dataclass(frozen=True)
class ResumeRecord:
    full_name: str
    job_title: str
    summary: str
    contact: Contact
    skills: Tuple[str, ...] = ()
    experience: Tuple[Experience, ...] = ()
    education: Tuple[Education, ...] = ()
    projects: Optional[Tuple[Project, ...]] = field(default=None)

    # ───────────────────────────────────────── decoding ──
    @classmethod
    def from_dict(cls, data: Any) -> "ResumeRecord":
        """Build a record from the collaborator's camelCase payload.

        Raises RecordDecodeError when a required key is missing, a value has
        the wrong type, or the contact email is empty.
        """
        if not isinstance(data, dict):
            raise RecordDecodeError("résumé payload must be a JSON object")

        contact_raw = _require(data, "contact", dict)
        email = _require(contact_raw, "email", str, where="contact")
        if not email:
            raise RecordDecodeError("contact.email must not be empty")
        contact = Contact(
            email=email,
            phone=_optional(contact_raw, "phone", "contact") or "",
            location=_optional(contact_raw, "location", "contact"),
            linkedin=_optional(contact_raw, "linkedin", "contact"),
            website=_optional(contact_raw, "website", "contact"),
        )

        experience = tuple(
            Experience(
                role=_require(e, "role", str, where=f"experience[{i}]"),
                company=_require(e, "company", str, where=f"experience[{i}]"),
                dates=_require(e, "dates", str, where=f"experience[{i}]"),
                description=_strings(
                    _require(e, "description", list, where=f"experience[{i}]"),
                    f"experience[{i}].description",
                ),
                location=_optional(e, "location", f"experience[{i}]"),
            )
            for i, e in enumerate(_entries(data, "experience"))
        )
        education = tuple(
            Education(
                degree=_require(e, "degree", str, where=f"education[{i}]"),
                school=_require(e, "school", str, where=f"education[{i}]"),
                dates=_require(e, "dates", str, where=f"education[{i}]"),
                location=_optional(e, "location", f"education[{i}]"),
            )
            for i, e in enumerate(_entries(data, "education"))
        )

        projects = None
        if data.get("projects") is not None:
            projects = tuple(
                Project(
                    name=_optional(p, "name", f"projects[{i}]") or "",
                    description=_optional(p, "description", f"projects[{i}]") or "",
                    link=_optional(p, "link", f"projects[{i}]"),
                )
                for i, p in enumerate(_entries(data, "projects"))
            )

        return cls(
            full_name=_require(data, "fullName", str),
            job_title=_optional(data, "jobTitle", "record") or "",
            summary=_require(data, "summary", str),
            contact=contact,
            skills=_strings(_require(data, "skills", list), "skills"),
            experience=experience,
            education=education,
            projects=projects,
        )

    def to_dict(self) -> Dict[str, Any]:
        contact = {"email": self.contact.email, "phone": self.contact.phone}
        for name in CONTACT_FIELDS[2:]:
            if (value := getattr(self.contact, name)) is not None:
                contact[name] = value

        out: Dict[str, Any] = {
            "fullName": self.full_name,
            "jobTitle": self.job_title,
            "contact": contact,
            "summary": self.summary,
            "skills": list(self.skills),
            "experience": [_without_none({
                "role": e.role,
                "company": e.company,
                "location": e.location,
                "dates": e.dates,
                "description": list(e.description),
            }) for e in self.experience],
            "education": [_without_none({
                "degree": e.degree,
                "school": e.school,
                "location": e.location,
                "dates": e.dates,
            }) for e in self.education],
        }
        if self.projects is not None:
            out["projects"] = [_without_none({
                "name": p.name,
                "description": p.description,
                "link": p.link,
            }) for p in self.projects]
        return out


# ───────────────────────────────────────── helpers ──
def _require(obj: Dict[str, Any], key: str, kind: type, where: str = "record"):
    if key not in obj or obj[key] is None:
        raise RecordDecodeError(f"{where}: missing required field '{key}'")
    value = obj[key]
    if not isinstance(value, kind):
        raise RecordDecodeError(
            f"{where}.{key}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _optional(obj: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = obj.get(key)
    if value is not None and not isinstance(value, str):
        raise RecordDecodeError(f"{where}.{key}: expected str, got {type(value).__name__}")
    return value


def _entries(data: Dict[str, Any], key: str):
    items = _require(data, key, list)
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise RecordDecodeError(f"{key}[{i}]: expected object, got {type(item).__name__}")
    return items


def _strings(items: list, where: str) -> Tuple[str, ...]:
    for i, item in enumerate(items):
        if not isinstance(item, str):
            raise RecordDecodeError(f"{where}[{i}]: expected str, got {type(item).__name__}")
    return tuple(items)


def _without_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}
