import pytest

from solverhub.schemas.schemas import Application, Problem, Profile
from solverhub.services.filters import (
    ALL,
    ListFilters,
    collect_tags,
    filter_applications_by_status,
    filter_problems,
    filter_solvers,
    filter_startups,
    guest_view,
    normalize_filters,
)

ACME = Profile(id="s1", email="hi@acme.io", name="Acme", role="startup", company_name="Acme Robotics")
LEAF = Profile(id="s2", email="hi@leaf.io", name="Leaf", role="startup", company_name="Leaf Labs",
               company_description="Vertical farming sensors", sectors=["AgTech", "IoT"])


def make_problem(pid, title, skills, level="intermediate", featured=False, startup=ACME):
    return Problem(
        id=pid,
        title=title,
        description=f"{title} for our platform",
        startup_id=startup.id,
        startup=startup,
        required_skills=skills,
        experience_level=level,
        status="open",
        featured=featured,
    )


@pytest.fixture
def problems():
    return [
        make_problem("p1", "Mobile app", ["React Native", "JavaScript"], "intermediate", featured=True),
        make_problem("p2", "Landing page", ["Figma", "Web Design"], "beginner"),
        make_problem("p3", "Recommendation model", ["Python", "Machine Learning"], "advanced",
                     featured=True, startup=LEAF),
    ]


@pytest.fixture
def solvers():
    return [
        Profile(id="u1", email="a@x.io", name="Ada Park", role="student", university="MIT",
                major="Design", skills=["Figma"], experience_level="advanced", featured=True),
        Profile(id="u2", email="b@x.io", name="Ben Ortiz", role="student", university="UC Berkeley",
                major="Data Science", skills=["Python", "SQL"], experience_level="beginner"),
    ]


class TestFilterProblems:
    def test_no_filters_returns_collection_unchanged(self, problems):
        assert filter_problems(problems) == problems
        assert filter_problems(problems, "", ALL, []) == problems

    def test_does_not_mutate_input(self, problems):
        before = list(problems)
        filter_problems(problems, "app", "intermediate", ["JavaScript"])
        assert problems == before

    def test_unknown_tag_gives_empty_result(self, problems):
        assert filter_problems(problems, selected_skills=["COBOL"]) == []

    def test_search_is_case_insensitive_substring(self, problems):
        assert [p.id for p in filter_problems(problems, "MOBILE")] == ["p1"]

    def test_search_matches_skills_and_startup(self, problems):
        assert [p.id for p in filter_problems(problems, "figma")] == ["p2"]
        assert [p.id for p in filter_problems(problems, "leaf labs")] == ["p3"]
        assert [p.id for p in filter_problems(problems, "acme")] == ["p1", "p2"]

    def test_experience_facet(self, problems):
        assert [p.id for p in filter_problems(problems, experience_level="advanced")] == ["p3"]

    def test_skills_match_any_selected(self, problems):
        result = filter_problems(problems, selected_skills=["Python", "Figma"])
        assert [p.id for p in result] == ["p2", "p3"]

    def test_filters_combine(self, problems):
        assert filter_problems(problems, "model", "beginner") == []

    def test_idempotent(self, problems):
        once = filter_problems(problems, "a", ALL, ["Python", "JavaScript"])
        twice = filter_problems(once, "a", ALL, ["Python", "JavaScript"])
        assert once == twice


class TestFilterSolvers:
    def test_search_university_and_major(self, solvers):
        assert [s.id for s in filter_solvers(solvers, "berkeley")] == ["u2"]
        assert [s.id for s in filter_solvers(solvers, "design")] == ["u1"]

    def test_facet_and_skills(self, solvers):
        assert [s.id for s in filter_solvers(solvers, experience_level="beginner")] == ["u2"]
        assert [s.id for s in filter_solvers(solvers, selected_skills=["Figma"])] == ["u1"]

    def test_identity(self, solvers):
        assert filter_solvers(solvers) == solvers


def test_filter_startups_by_sector_and_description():
    startups = [ACME, LEAF]
    assert filter_startups(startups, "iot") == [LEAF]
    assert filter_startups(startups, "vertical") == [LEAF]
    assert filter_startups(startups, "") == startups


def test_guest_view_keeps_only_featured(problems):
    assert guest_view(problems, is_authenticated=False) == [p for p in problems if p.featured]
    assert guest_view(problems, is_authenticated=True) == problems


def test_collect_tags(problems, solvers):
    assert collect_tags(problems, "required_skills") == [
        "Figma", "JavaScript", "Machine Learning", "Python", "React Native", "Web Design",
    ]
    assert collect_tags(solvers) == ["Figma", "Python", "SQL"]


def test_filter_applications_by_status():
    apps = [
        Application(id="a1", problem_id="p1", user_id="u1", status="pending"),
        Application(id="a2", problem_id="p1", user_id="u2", status="accepted"),
    ]
    assert [a.id for a in filter_applications_by_status(apps, "accepted")] == ["a2"]
    assert filter_applications_by_status(apps, None) == apps


def test_normalize_filters_trims_and_dedupes():
    filters = normalize_filters("  app ", None, ["Python", " Python", "", "SQL"])
    assert filters.search_term == "app"
    assert filters.experience_level == ALL
    assert filters.selected_skills == ("Python", "SQL")
    assert normalize_filters() == ListFilters()
