import pytest

from solverhub.core.exceptions import (
    AuthorizationError, DuplicateApplicationError, InvalidStatusTransition, NotFoundError, ValidationError,
)
from solverhub.core.session import AuthSession
from solverhub.db.demo_data import demo_problems, demo_students
from solverhub.db.postgres import drop_db
from solverhub.schemas.schemas import ApplicationCreate, ApplicationStatus, ProblemCreate, ProblemStatus
from solverhub.services import application_service, problem_service, profile_service
from solverhub.services.application_service import can_transition
from solverhub.services.seed_service import populate_database


def apply(session, problem, letter="I have built three recommenders before."):
    return application_service.create_application(
        session, ApplicationCreate(problem_id=problem.id, cover_letter=letter)
    )


class TestProblems:
    def test_create_problem_sets_owner_and_defaults(self, startup_session, open_problem):
        assert open_problem.startup_id == startup_session.user.id
        assert open_problem.status == ProblemStatus.open
        assert open_problem.featured is False
        assert open_problem.applications_count == 0
        assert open_problem.startup.company_name == startup_session.user.company_name

    def test_students_cannot_post(self, student_session):
        with pytest.raises(AuthorizationError):
            problem_service.create_problem(student_session, ProblemCreate(title="Nope", description="x"))

    def test_guests_cannot_post(self):
        with pytest.raises(AuthorizationError):
            problem_service.create_problem(AuthSession(), ProblemCreate(title="Nope", description="x"))

    def test_get_problems_embeds_startup(self, open_problem):
        problems = problem_service.get_problems()
        assert [p.id for p in problems] == [open_problem.id]
        assert problems[0].startup.id == open_problem.startup_id

    def test_get_problems_by_startup(self, startup_session, other_startup_session, open_problem):
        problem_service.create_problem(other_startup_session, ProblemCreate(title="Other one", description="x"))
        mine = problem_service.get_problems_by_startup_id(startup_session.user.id)
        assert [p.id for p in mine] == [open_problem.id]

    def test_missing_problem_is_none(self):
        assert problem_service.get_problem_by_id("nope") is None

    def test_owner_updates_status(self, startup_session, open_problem):
        updated = problem_service.update_problem_status(startup_session, open_problem.id, ProblemStatus.in_progress)
        assert updated.status == ProblemStatus.in_progress

    def test_only_owner_updates_status(self, other_startup_session, open_problem):
        with pytest.raises(AuthorizationError):
            problem_service.update_problem_status(other_startup_session, open_problem.id, ProblemStatus.cancelled)
        assert problem_service.get_problem_by_id(open_problem.id).status == ProblemStatus.open

    def test_update_unknown_problem(self, startup_session):
        with pytest.raises(NotFoundError):
            problem_service.update_problem_status(startup_session, "missing", ProblemStatus.completed)


class TestApplications:
    def test_apply_creates_pending_application(self, student_session, open_problem):
        application = apply(student_session, open_problem)
        assert application.status == ApplicationStatus.pending
        assert application.user_id == student_session.user.id
        assert application.problem.id == open_problem.id
        assert problem_service.get_problem_by_id(open_problem.id).applications_count == 1

    def test_duplicate_caught_by_unique_constraint(self, student_session, open_problem, monkeypatch):
        apply(student_session, open_problem)
        # Second request passed its own check before the first one committed
        monkeypatch.setattr(application_service, "_already_applied", lambda db, problem_id, user_id: False)

        with pytest.raises(DuplicateApplicationError):
            apply(student_session, open_problem)
        assert len(application_service.get_applications_for_user(student_session.user.id)) == 1

    def test_startups_cannot_apply(self, other_startup_session, open_problem):
        with pytest.raises(AuthorizationError):
            apply(other_startup_session, open_problem)

    def test_cannot_apply_twice(self, student_session, open_problem):
        apply(student_session, open_problem)
        with pytest.raises(DuplicateApplicationError):
            apply(student_session, open_problem)

    def test_cannot_apply_to_closed_problem(self, student_session, startup_session, open_problem):
        problem_service.update_problem_status(startup_session, open_problem.id, ProblemStatus.completed)
        with pytest.raises(ValidationError):
            apply(student_session, open_problem)

    def test_cannot_apply_to_missing_problem(self, student_session, open_problem):
        open_problem.id = "missing"
        with pytest.raises(NotFoundError):
            apply(student_session, open_problem)

    def test_demo_accounts_are_read_only(self, manager, open_problem):
        session = AuthSession()
        manager.login(session, "student@example.com", "x")
        with pytest.raises(AuthorizationError):
            apply(session, open_problem)

    def test_reads_embed_related_rows(self, student_session, startup_session, open_problem):
        application = apply(student_session, open_problem)

        mine = application_service.get_applications_for_user(student_session.user.id)
        assert [a.id for a in mine] == [application.id]
        assert mine[0].problem.startup.id == startup_session.user.id

        for_problem = application_service.get_applications_for_problem(open_problem.id)
        assert for_problem[0].user.name == student_session.user.name
        assert for_problem[0].problem is None

        received = application_service.get_applications_for_startup(startup_session.user.id)
        assert [a.id for a in received] == [application.id]
        assert received[0].user.id == student_session.user.id

    def test_startup_without_problems_has_no_applications(self, other_startup_session):
        assert application_service.get_applications_for_startup(other_startup_session.user.id) == []

    @pytest.mark.parametrize("decision", [ApplicationStatus.accepted, ApplicationStatus.rejected])
    def test_owner_decides_pending_application(self, student_session, startup_session, open_problem, decision):
        application = apply(student_session, open_problem)
        updated = application_service.update_application_status(startup_session, application.id, decision)
        assert updated.status == decision
        assert application_service.get_application_by_id(application.id).status == decision

    @pytest.mark.parametrize("first,second", [
        (ApplicationStatus.accepted, ApplicationStatus.rejected),
        (ApplicationStatus.rejected, ApplicationStatus.accepted),
        (ApplicationStatus.accepted, ApplicationStatus.pending),
        (ApplicationStatus.rejected, ApplicationStatus.rejected),
    ])
    def test_decisions_are_final(self, student_session, startup_session, open_problem, first, second):
        application = apply(student_session, open_problem)
        application_service.update_application_status(startup_session, application.id, first)

        with pytest.raises(InvalidStatusTransition):
            application_service.update_application_status(startup_session, application.id, second)
        assert application_service.get_application_by_id(application.id).status == first

    def test_pending_to_pending_is_rejected(self, student_session, startup_session, open_problem):
        application = apply(student_session, open_problem)
        with pytest.raises(InvalidStatusTransition):
            application_service.update_application_status(startup_session, application.id, ApplicationStatus.pending)

    def test_decision_write_only_touches_pending_rows(self, student_session, startup_session, open_problem,
                                                     monkeypatch):
        application = apply(student_session, open_problem)
        application_service.update_application_status(startup_session, application.id, ApplicationStatus.accepted)

        # A concurrent review that read the row while it was still pending
        monkeypatch.setattr(application_service, "can_transition", lambda current, requested: True)

        with pytest.raises(InvalidStatusTransition):
            application_service.update_application_status(
                startup_session, application.id, ApplicationStatus.rejected
            )
        assert application_service.get_application_by_id(application.id).status == ApplicationStatus.accepted

    def test_only_owner_reviews(self, student_session, other_startup_session, open_problem):
        application = apply(student_session, open_problem)
        with pytest.raises(AuthorizationError):
            application_service.update_application_status(
                other_startup_session, application.id, ApplicationStatus.accepted
            )

    def test_review_unknown_application(self, startup_session):
        with pytest.raises(NotFoundError):
            application_service.update_application_status(startup_session, "missing", ApplicationStatus.accepted)


def test_transition_table():
    assert can_transition("pending", "accepted")
    assert can_transition("pending", "rejected")
    assert not can_transition("accepted", "rejected")
    assert not can_transition("rejected", "pending")


class TestStoreFailures:
    def test_reads_return_empty_when_store_fails(self):
        drop_db()
        assert problem_service.get_problems() == []
        assert profile_service.get_students() == []
        assert profile_service.get_user_by_id("anyone") is None

    def test_demo_mode_serves_demo_catalogue(self, settings, monkeypatch):
        monkeypatch.setattr(settings, "demo_mode", True)
        drop_db()
        assert [p.id for p in problem_service.get_problems()] == [p.id for p in demo_problems()]
        assert [s.id for s in profile_service.get_students()] == [s.id for s in demo_students()]

    def test_demo_mode_does_not_replace_real_data(self, settings, monkeypatch, open_problem):
        monkeypatch.setattr(settings, "demo_mode", True)
        assert [p.id for p in problem_service.get_problems()] == [open_problem.id]


def test_populate_database_runs_once():
    assert populate_database()
    assert len(problem_service.get_problems()) == len(demo_problems())
    assert len(profile_service.get_students()) == len(demo_students())

    assert populate_database()
    assert len(problem_service.get_problems()) == len(demo_problems())
