import pytest

from skillforge.errors import NotFound, ValidationError
from skillforge.schemas.quiz import QuestionType
from skillforge.seed import seed_demo_data
from skillforge.services.store import Collection
from factories import make_attempt, make_course, make_quiz, make_user


def test_create_and_get(store):
    store.create(Collection.COURSES, make_course("c1", title="Python"))

    course = store.get_by_id(Collection.COURSES, "c1")
    assert course.title == "Python"
    assert course.topics == ["Variables"]
    assert store.get_by_id(Collection.COURSES, "missing") is None


def test_list_all_keeps_insertion_order(store):
    for course_id in ["c3", "c1", "c2"]:
        store.create(Collection.COURSES, make_course(course_id))

    assert [c.id for c in store.list_all(Collection.COURSES)] == ["c3", "c1", "c2"]


def test_questions_round_trip_as_json(store):
    store.create(Collection.QUIZZES, make_quiz("qz1"))

    quiz = store.get_by_id(Collection.QUIZZES, "qz1")
    assert quiz.questions[0].type == QuestionType.MULTIPLE_CHOICE
    assert quiz.questions[0].options == ["let", "var", "const", "static"]
    assert quiz.questions[1].options is None


def test_update(store):
    store.create(Collection.COURSES, make_course("c1", title="Old"))
    course = store.get_by_id(Collection.COURSES, "c1")

    store.update(Collection.COURSES, course.model_copy(update={"title": "New"}))

    assert store.get_by_id(Collection.COURSES, "c1").title == "New"


def test_update_missing(store):
    with pytest.raises(NotFound):
        store.update(Collection.COURSES, make_course("ghost"))


def test_attempts_are_immutable(store):
    attempt = make_attempt("a1", "qz1", "s1", 5)
    store.create(Collection.ATTEMPTS, attempt)

    with pytest.raises(ValidationError):
        store.update(Collection.ATTEMPTS, attempt.model_copy(update={"score": 20}))
    assert store.get_by_id(Collection.ATTEMPTS, "a1").score == 5


def test_delete(store):
    store.create(Collection.USERS, make_user("u1"))
    store.delete(Collection.USERS, "u1")

    assert store.get_by_id(Collection.USERS, "u1") is None
    with pytest.raises(NotFound):
        store.delete(Collection.USERS, "u1")


def test_find_user_by_email(store):
    store.create(Collection.USERS, make_user("u1", email="u1@example.com"))
    assert store.find_user_by_email("u1@example.com").id == "u1"
    assert store.find_user_by_email("nobody@example.com") is None


def test_credentials(store):
    assert not store.verify_credential("a@example.com", "pw")

    store.set_credential("a@example.com", "pw")
    assert store.verify_credential("a@example.com", "pw")
    assert not store.verify_credential("a@example.com", "PW")

    store.set_credential("a@example.com", "pw2")
    assert store.get_credential("a@example.com") == "pw2"

    store.delete_credential("a@example.com")
    assert store.get_credential("a@example.com") is None


def test_key_values(store):
    assert store.get_value("k") is None
    store.set_value("k", "v1")
    store.set_value("k", "v2")
    assert store.get_value("k") == "v2"
    store.remove_value("k")
    assert store.get_value("k") is None


def test_seed_runs_once(store):
    assert seed_demo_data(store) is True
    assert seed_demo_data(store) is False
    assert len(store.list_all(Collection.USERS)) == 3
    assert store.verify_credential("mentor@skillforge.com", "mentor123")
