import pytest
from pydantic import ValidationError

from skillforge.schemas.quiz import Question, QuestionType
from skillforge.services.scoring import grade, is_correct, percentage, round_half_up, score
from factories import mc_question, short_question


@pytest.fixture
def questions():
    return [mc_question("q1", "const", 10), short_question("q2", "object", 10)]


def test_all_correct_with_case_and_whitespace_noise(questions):
    assert score(questions, {"q1": "const", "q2": "OBJECT "}) == (20, 20)


def test_no_answers_scores_zero(questions):
    assert score(questions, {}) == (0, 20)


def test_answer_normalization_is_symmetric(questions):
    assert score(questions, {"q1": " Const "}) == score(questions, {"q1": "const"})


def test_total_is_sum_of_points_regardless_of_answers():
    questions = [mc_question("a", points=3), short_question("b", points=7), short_question("c", points=5)]
    earned, total = score(questions, {"b": "object"})
    assert total == 15
    assert earned == 7
    assert earned <= total


def test_no_partial_credit_or_numeric_tolerance():
    question = short_question("n", correct="3.14")
    assert not is_correct(question, "3.140")
    assert not is_correct(question, "3.14 approx")
    assert is_correct(question, " 3.14\t")


def test_answers_for_unknown_questions_are_ignored(questions):
    assert score(questions, {"zzz": "const"}) == (0, 20)


def test_empty_quiz():
    assert score([], {}) == (0, 0)
    assert grade([], {}).percentage == 0


def test_grade_breakdown(questions):
    result = grade(questions, {"q1": "let"})

    assert result.score == 0
    assert result.total_points == 20
    first, second = result.breakdown
    assert first.user_answer == "let"
    assert first.correct_answer == "const"
    assert first.is_correct is False
    assert first.points_awarded == 0
    assert second.user_answer is None
    assert second.max_points == 10


def test_grade_percentage(questions):
    assert grade(questions, {"q1": "CONST"}).percentage == 50


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(66.666) == 67
    assert round_half_up(0.49) == 0


def test_percentage():
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(5, 0) == 0


def test_unanswered_question_is_never_correct(questions):
    assert not is_correct(questions[1], None)
    assert score(questions, {"q2": ""}) == (0, 20)


@pytest.mark.parametrize("blank", ["", "   "])
def test_blank_correct_answer_is_rejected(blank):
    with pytest.raises(ValidationError):
        Question(id="q1", type=QuestionType.SHORT_ANSWER, question="?", correct_answer=blank, points=10)


def test_multiple_choice_answer_must_match_an_option_exactly():
    with pytest.raises(ValidationError):
        Question(
            id="q1",
            type=QuestionType.MULTIPLE_CHOICE,
            question="Which keyword declares a constant?",
            options=["let", "var", "const", "static"],
            correct_answer="Const",
        )
