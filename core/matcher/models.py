#!/usr/bin/env python3
"""
Matcher Models - Data structures for matching.

Candidates and job requirements are read-only snapshots handed in by the
caller. ``from_dict`` constructors are the validation boundary: they accept
snake_case and camelCase keys and reject malformed records, so the scorer
can assume well-formed input.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Dict, Any, Optional, Union
from dateutil import parser as date_parser

from core.exceptions import InvalidInputError

Proficiency = Union[int, float, str, None]


class Fit(str, Enum):
    """Categorical fit bucket derived from a match score."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class Skill:
    """A named skill with optional proficiency (0-100 or a label) and category."""
    name: str
    proficiency: Proficiency = None
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Union[str, Dict[str, Any], "Skill"]) -> "Skill":
        if isinstance(data, Skill):
            return data
        if isinstance(data, str):
            data = {"name": data}
        if not isinstance(data, dict):
            raise InvalidInputError(f"Skill must be a mapping or a name, got {type(data).__name__}")

        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError(f"Skill name must be a non-empty string, got {name!r}")

        proficiency = _pick(data, "proficiency", "proficiency_score", "proficiencyScore")
        if isinstance(proficiency, bool):
            raise InvalidInputError(f"Invalid proficiency for skill {name!r}: {proficiency!r}")
        numeric = proficiency
        if isinstance(proficiency, str):
            try:
                numeric = float(proficiency.strip())
            except ValueError:
                numeric = None  # a label such as "expert"
        if isinstance(numeric, (int, float)) and not 0 <= numeric <= 100:
            raise InvalidInputError(f"Proficiency for skill {name!r} must be within 0-100, got {proficiency}")

        return cls(name=name, proficiency=proficiency, category=data.get("category"))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        if self.proficiency is not None:
            result["proficiency"] = self.proficiency
        if self.category is not None:
            result["category"] = self.category
        return result


def _skills_from(raw: Any, owner: str) -> List[Skill]:
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise InvalidInputError(f"Skills of {owner} must be a list")
    return [Skill.from_dict(s) for s in raw]


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so aware and naive values compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class AvailabilityWindow:
    """Period during which a candidate is available."""
    start: datetime
    end: datetime

    def overlaps(self, start: Optional[datetime], end: Optional[datetime]) -> bool:
        if start is not None and as_utc(self.end) < as_utc(start):
            return False
        if end is not None and as_utc(self.start) > as_utc(end):
            return False
        return True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AvailabilityWindow":
        if not isinstance(data, dict):
            raise InvalidInputError(f"Availability window must be a mapping, got {data!r}")
        try:
            start = as_utc(date_parser.isoparse(str(_pick(data, "start", "start_date", "startDate"))))
            end = as_utc(date_parser.isoparse(str(_pick(data, "end", "end_date", "endDate"))))
        except (ValueError, TypeError) as e:
            raise InvalidInputError(f"Invalid availability window {data!r}: {e}") from e
        if end < start:
            raise InvalidInputError(f"Availability window ends before it starts: {data!r}")
        return cls(start=start, end=end)

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class JobRequirement:
    """Skill requirements of one job, plus attributes used by pool filters."""
    id: str
    required_skills: List[Skill] = field(default_factory=list)
    preferred_skills: List[Skill] = field(default_factory=list)
    title: Optional[str] = None
    experience_level: Optional[str] = None
    location: Optional[str] = None
    remote_allowed: Optional[bool] = None

    @property
    def skills(self) -> List[Skill]:
        return list(self.required_skills) + list(self.preferred_skills)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobRequirement":
        if not isinstance(data, dict):
            raise InvalidInputError("Job requirement must be a mapping")
        job_id = data.get("id")
        if job_id is None or str(job_id) == "":
            raise InvalidInputError("Job requirement is missing an id")
        owner = f"job {job_id}"
        return cls(
            id=str(job_id),
            required_skills=_skills_from(_pick(data, "required_skills", "requiredSkills"), owner),
            preferred_skills=_skills_from(_pick(data, "preferred_skills", "preferredSkills"), owner),
            title=data.get("title"),
            experience_level=_pick(data, "experience_level", "experienceLevel"),
            location=data.get("location"),
            remote_allowed=_pick(data, "remote_allowed", "remoteAllowed"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "required_skills": [s.to_dict() for s in self.required_skills],
            "preferred_skills": [s.to_dict() for s in self.preferred_skills],
            "experience_level": self.experience_level,
            "location": self.location,
            "remote_allowed": self.remote_allowed,
        }


@dataclass(frozen=True)
class Candidate:
    """A candidate's skills, plus attributes used by pool filters."""
    id: str
    name: str = ""
    email: str = ""
    skills: List[Skill] = field(default_factory=list)
    experience_level: Optional[str] = None
    location: Optional[str] = None
    remote_ok: Optional[bool] = None
    availability: List[AvailabilityWindow] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Candidate":
        if not isinstance(data, dict):
            raise InvalidInputError("Candidate must be a mapping")
        candidate_id = data.get("id")
        if candidate_id is None or str(candidate_id) == "":
            raise InvalidInputError("Candidate is missing an id")
        windows = data.get("availability") or []
        return cls(
            id=str(candidate_id),
            name=data.get("name") or "",
            email=data.get("email") or "",
            skills=_skills_from(data.get("skills"), f"candidate {candidate_id}"),
            experience_level=_pick(data, "experience_level", "experienceLevel"),
            location=data.get("location"),
            remote_ok=_pick(data, "remote_ok", "remoteOk"),
            availability=[AvailabilityWindow.from_dict(w) for w in windows],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "skills": [s.to_dict() for s in self.skills],
            "experience_level": self.experience_level,
            "location": self.location,
            "remote_ok": self.remote_ok,
            "availability": [w.to_dict() for w in self.availability],
        }


@dataclass(frozen=True)
class MatchResult:
    """Scored, explained match of one candidate against one job."""
    candidate_id: str
    score: int
    matching_skills: List[Skill]
    skill_gaps: List[Skill]
    overall_fit: Fit
    job_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidate_id": self.candidate_id,
            "job_id": self.job_id,
            "score": self.score,
            "matching_skills": [s.to_dict() for s in self.matching_skills],
            "skill_gaps": [s.to_dict() for s in self.skill_gaps],
            "overall_fit": self.overall_fit.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        return cls(
            candidate_id=str(data["candidate_id"]),
            job_id=data.get("job_id"),
            score=int(data["score"]),
            matching_skills=[Skill.from_dict(s) for s in data.get("matching_skills", [])],
            skill_gaps=[Skill.from_dict(s) for s in data.get("skill_gaps", [])],
            overall_fit=Fit(data["overall_fit"]),
        )
