"""
Test helpers for the skill matching suite.

Builders here keep test bodies short: skills may be given as plain names
or as (name, proficiency) tuples.
"""

from typing import Any, Iterable, List, Optional, Tuple, Union

from core.matcher.models import Candidate, JobRequirement, Skill

SkillLike = Union[str, Tuple[str, Any], Skill]

TEST_DB_URL = "sqlite://"


def make_skills(entries: Optional[Iterable[SkillLike]]) -> List[Skill]:
    skills = []
    for entry in entries or []:
        if isinstance(entry, Skill):
            skills.append(entry)
        elif isinstance(entry, tuple):
            skills.append(Skill(name=entry[0], proficiency=entry[1]))
        else:
            skills.append(Skill(name=entry))
    return skills


def make_candidate(candidate_id: str, skills: Optional[Iterable[SkillLike]] = None, **kwargs) -> Candidate:
    return Candidate(
        id=candidate_id,
        name=kwargs.pop("name", f"Candidate {candidate_id}"),
        email=kwargs.pop("email", f"{candidate_id}@example.com"),
        skills=make_skills(skills),
        **kwargs
    )


def make_job(
    job_id: str,
    required: Optional[Iterable[SkillLike]] = None,
    preferred: Optional[Iterable[SkillLike]] = None,
    **kwargs
) -> JobRequirement:
    return JobRequirement(
        id=job_id,
        required_skills=make_skills(required),
        preferred_skills=make_skills(preferred),
        **kwargs
    )
