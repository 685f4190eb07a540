"""
List filters - pure functions over an already-loaded collection.

Nothing here touches the store. Every function returns a new list and never
mutates its input, so applying the same filters twice gives the same result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from solverhub.schemas.schemas import Application, Problem, Profile

ALL = "all"

T = TypeVar("T")


@dataclass(frozen=True)
class ListFilters:
    search_term: str = ""
    experience_level: str = ALL
    selected_skills: Tuple[str, ...] = ()


def normalize_filters(
    search: Optional[str] = None,
    experience_level: Optional[str] = None,
    skills: Optional[Iterable[str]] = None,
) -> ListFilters:
    selected: List[str] = []
    for s in skills or []:
        s = (s or "").strip()
        if s and s not in selected:
            selected.append(s)
    return ListFilters(
        search_term=(search or "").strip(),
        experience_level=(experience_level or ALL).strip() or ALL,
        selected_skills=tuple(selected),
    )


def _contains(term: str, *values: Optional[str]) -> bool:
    return any(v and term in v.lower() for v in values)


def _any_contains(term: str, values: Optional[Sequence[str]]) -> bool:
    return any(term in v.lower() for v in values or [])


def _has_any(selected: Sequence[str], values: Optional[Sequence[str]]) -> bool:
    return any(s in (values or []) for s in selected)


def _level(value) -> Optional[str]:
    return getattr(value, "value", value)


def filter_problems(
    problems: Sequence[Problem],
    search_term: str = "",
    experience_level: str = ALL,
    selected_skills: Sequence[str] = (),
) -> List[Problem]:
    """
    Search title, description, startup name/company and skills; match the
    experience facet unless "all"; keep problems requiring any selected skill.
    """
    filtered = list(problems)

    if search_term:
        term = search_term.lower()
        filtered = [
            p for p in filtered
            if _contains(term, p.title, p.description)
            or (p.startup is not None and _contains(term, p.startup.name, p.startup.company_name))
            or _any_contains(term, p.required_skills)
        ]

    if experience_level and experience_level != ALL:
        filtered = [p for p in filtered if _level(p.experience_level) == experience_level]

    if selected_skills:
        filtered = [p for p in filtered if _has_any(selected_skills, p.required_skills)]

    return filtered


def filter_solvers(
    solvers: Sequence[Profile],
    search_term: str = "",
    experience_level: str = ALL,
    selected_skills: Sequence[str] = (),
) -> List[Profile]:
    filtered = list(solvers)

    if search_term:
        term = search_term.lower()
        filtered = [
            s for s in filtered
            if _contains(term, s.name, s.university, s.major) or _any_contains(term, s.skills)
        ]

    if experience_level and experience_level != ALL:
        filtered = [s for s in filtered if _level(s.experience_level) == experience_level]

    if selected_skills:
        filtered = [s for s in filtered if _has_any(selected_skills, s.skills)]

    return filtered


def filter_startups(startups: Sequence[Profile], search_term: str = "") -> List[Profile]:
    """Search name, company description and sectors."""
    if not search_term:
        return list(startups)
    term = search_term.lower()
    return [
        s for s in startups
        if _contains(term, s.name, s.company_name, s.company_description) or _any_contains(term, s.sectors)
    ]


def filter_applications_by_status(applications: Sequence[Application], status: Optional[str] = None) -> List[Application]:
    if not status:
        return list(applications)
    return [a for a in applications if _level(a.status) == status]


def guest_view(items: Sequence[T], is_authenticated: bool) -> List[T]:
    """Visitors without a session only see featured items. Not a security boundary."""
    if is_authenticated:
        return list(items)
    return [i for i in items if getattr(i, "featured", False)]


def collect_tags(items: Iterable[object], attr: str = "skills") -> List[str]:
    """Sorted unique tags across a collection, for the facet picker."""
    tags = set()
    for item in items:
        tags.update(getattr(item, attr, None) or [])
    return sorted(tags)


def apply_filters(problems: Sequence[Problem], filters: ListFilters) -> List[Problem]:
    return filter_problems(problems, filters.search_term, filters.experience_level, filters.selected_skills)
