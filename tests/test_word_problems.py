import pytest

from mathquest.problems import word_problems
from mathquest.problems.answers import to_number


def test_every_scenario_builds_for_each_grade_it_supports():
    for scenario in word_problems.SCENARIOS:
        assert scenario.kind in word_problems.KINDS
        for grade in scenario.grades():
            for _ in range(20):
                problem = word_problems.build(scenario, grade)
                assert problem["type"] == "word_problems"
                assert problem["grade"] == grade
                assert "{" not in problem["question"]
                value = to_number(problem["answer"])
                assert value is not None
                assert value >= 0


def test_money_scenarios_are_not_offered_to_grade_three():
    kinds = {s.kind for s in word_problems.eligible_scenarios(3)}
    assert "decimal" not in kinds
    assert "multi_step" not in kinds
    assert {"multiplication", "division", "subtraction"} <= kinds


def test_division_scenarios_share_evenly():
    for _ in range(50):
        problem = word_problems.generate(4, kind="division")
        assert to_number(problem["answer"]).denominator == 1


def test_decimal_answers_have_two_places():
    for _ in range(50):
        problem = word_problems.generate(5, kind="decimal")
        whole, _, cents = problem["answer"].partition(".")
        assert len(cents) == 2


def test_pick_scenario_without_a_match_raises():
    with pytest.raises(ValueError):
        word_problems.pick_scenario(3, kind="decimal")
