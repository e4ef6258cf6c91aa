import pytest

from skillforge.schemas.user import Role
from skillforge.services.analytics_service import (
    AnalyticsService,
    average_percent,
    build_course_summaries,
    build_student_summaries,
)
from skillforge.services.store import Collection
from factories import make_attempt, make_course, make_quiz, make_user


@pytest.fixture
def users():
    return [
        make_user("mentor-1", role=Role.MENTOR, name="Mia Mentor"),
        make_user("alice", name="Alice"),
        make_user("bob", name="Bob"),
        make_user("carol", name="Carol"),
    ]


def test_course_without_attempts_shows_na(users):
    rows = build_course_summaries([make_course("c1")], [make_quiz("qz1", "c1")], [], users)

    row = rows[0]
    assert row.attempt_count == 0
    assert row.quiz_count == 1
    assert row.average_score_percent is None
    assert row.average_display == "N/A"
    assert row.owner_name == "Mia Mentor"


def test_course_average_is_mean_of_percentages(users):
    attempts = [
        make_attempt("a1", "qz1", "alice", 10, 20),   # 50%
        make_attempt("a2", "qz2", "bob", 1, 3),       # 33.3%
        make_attempt("a3", "qz1", "carol", 20, 20),   # 100%
    ]
    quizzes = [make_quiz("qz1", "c1"), make_quiz("qz2", "c1")]

    row = build_course_summaries([make_course("c1")], quizzes, attempts, users)[0]

    assert row.attempt_count == 3
    assert row.average_score_percent == 61
    assert row.average_display == "61%"


def test_courses_sorted_by_attempts_stable(users):
    courses = [make_course("c1"), make_course("c2"), make_course("c3")]
    quizzes = [make_quiz("qz1", "c1"), make_quiz("qz2", "c2"), make_quiz("qz3", "c3")]
    attempts = [make_attempt("a1", "qz2", "alice", 5)]

    rows = build_course_summaries(courses, quizzes, attempts, users)

    assert [r.course.id for r in rows] == ["c2", "c1", "c3"]


def test_dangling_owner_and_quiz(users):
    courses = [make_course("c1", mentor_id="gone")]
    attempts = [make_attempt("a1", "deleted-quiz", "alice", 5)]

    row = build_course_summaries(courses, [], attempts, users)[0]

    assert row.owner_name == "Unknown"
    assert row.attempt_count == 0


def test_zero_point_attempt_counts_as_zero():
    assert average_percent([make_attempt("a1", "q", "s", 0, 0), make_attempt("a2", "q", "s", 10, 10)]) == 50
    assert average_percent([]) is None


def test_student_summaries_sorted_with_stable_ties(users):
    attempts = [
        make_attempt("a1", "qz1", "bob", 10, 20),     # bob first seen
        make_attempt("a2", "qz1", "alice", 20, 20),
        make_attempt("a3", "qz1", "carol", 10, 20),
        make_attempt("a4", "other", "alice", 0, 20),  # not the mentor's quiz
    ]

    rows = build_student_summaries(["qz1"], attempts, users)

    assert [r.student_id for r in rows] == ["alice", "bob", "carol"]
    assert rows[0].average_score_percent == 100
    assert rows[0].attempts_count == 1
    assert rows[1].average_score_percent == rows[2].average_score_percent == 50


def test_unknown_student_name(users):
    rows = build_student_summaries(["qz1"], [make_attempt("a1", "qz1", "ghost", 5, 10)], users)
    assert rows[0].student_name == "Unknown"


class TestAnalyticsService:

    @pytest.fixture
    def service(self, seeded):
        seeded.create(Collection.ATTEMPTS, make_attempt("a1", "quiz-js-vars-01", "user-student-01", 10, 20, minutes=1))
        seeded.create(Collection.ATTEMPTS, make_attempt("a2", "quiz-js-vars-01", "user-student-01", 20, 20, minutes=5))
        return AnalyticsService(seeded)

    def test_course_summaries(self, service):
        rows = service.course_summaries()

        assert [r.course.id for r in rows] == ["course-js-01", "course-react-02"]
        assert rows[0].attempt_count == 2
        assert rows[0].average_score_percent == 75
        assert rows[1].average_display == "N/A"
        assert rows[1].owner_name == "Mentor User"

    def test_student_summaries_scoped_to_mentor(self, service):
        rows = service.student_summaries("user-mentor-01")
        assert len(rows) == 1
        assert rows[0].student_name == "Student User"
        assert rows[0].attempts_count == 2

        assert service.student_summaries("user-admin-01") == []

    def test_student_progress_newest_first(self, service):
        progress = service.student_progress("user-student-01")

        assert progress.completed == 2
        assert progress.average_score_percent == 75
        assert [e.attempt_id for e in progress.attempts] == ["a2", "a1"]
        assert progress.attempts[0].quiz_title == "JavaScript Variables Quiz"
        assert progress.attempts[1].percentage == 50

    def test_student_progress_without_attempts(self, service):
        progress = service.student_progress("nobody")
        assert progress.completed == 0
        assert progress.average_score_percent is None
        assert progress.attempts == []

    def test_mentor_overview(self, service):
        overview = service.mentor_overview("user-mentor-01")
        assert (overview.courses, overview.quizzes, overview.attempts) == (2, 1, 2)
        assert overview.average_score_percent == 75

    def test_platform_overview(self, service):
        overview = service.platform_overview()
        assert overview.users == 3
        assert overview.mentors == 1
        assert overview.students == 1
        assert (overview.courses, overview.quizzes, overview.attempts) == (2, 1, 2)

    def test_reads_are_batched(self, service, seeded, monkeypatch):
        calls = []
        original = seeded.list_all

        def counting(collection):
            calls.append(collection)
            return original(collection)

        monkeypatch.setattr(service.store, "list_all", counting)
        service.course_summaries()

        assert sorted(c.value for c in calls) == ["attempts", "courses", "quizzes", "users"]
