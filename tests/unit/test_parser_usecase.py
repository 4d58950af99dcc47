"""
Unit tests for assembling use-case exercises.
"""
import pytest

from mdexercises import parse_exercise
from mdexercises.core.models import (
    Difficulty,
    EvaluationCriteria,
    Scenario,
    SolutionReveal,
    UseCaseDomain,
    UseCaseExercise,
    UseCasePrompt,
)

MINIMAL = "::: usecase\nid: uc1\ndomain: healthcare\ndifficulty: intermediate\n:::\n"


class TestFullUseCase:
    """Test a document that uses every use-case block."""

    @pytest.fixture
    def exercise(self, usecase_exercise_md, settings):
        return parse_exercise(usecase_exercise_md, settings)

    def test_variant_and_metadata(self, exercise):
        assert isinstance(exercise, UseCaseExercise)
        assert exercise.kind == "usecase"
        assert exercise.metadata.id == "uc-patient-portal"
        assert exercise.metadata.domain is UseCaseDomain.HEALTHCARE
        assert exercise.metadata.difficulty is Difficulty.INTERMEDIATE
        assert exercise.metadata.time_minutes == 60

    def test_title(self, exercise):
        assert exercise.title == "Threat Model: Patient Portal"
        assert exercise.description == ""

    def test_scenario(self, exercise):
        scenario = exercise.scenario
        assert scenario.organization == "Acme Health"
        assert scenario.industry == "Healthcare"
        assert scenario.stakeholders == ("CISO", "Patients")
        assert scenario.constraints == ("HIPAA",)
        assert scenario.content == "Acme Health is launching a patient portal.\n\nIt stores lab results."

    def test_prompt(self, exercise):
        assert exercise.prompt.aspects == ("Authentication", "Data at rest")
        assert exercise.prompt.prompt == "Identify the three biggest risks and how to mitigate them."

    def test_hints(self, exercise):
        assert len(exercise.hints) == 1
        assert exercise.hints[0].content == "Think about who can see lab results."

    def test_evaluation(self, exercise):
        evaluation = exercise.evaluation
        assert [(c.name, c.weight) for c in evaluation.criteria] == [
            ("Threat identification", 60),
            ("Mitigations", 40),
        ]
        assert evaluation.criteria[1].description == ""
        assert evaluation.key_points == ("Patient data exposure", "Account takeover")
        assert (evaluation.min_words, evaluation.max_words) == (150, 600)
        assert evaluation.pass_threshold == 0.7

    def test_sample_answer_and_context(self, exercise):
        assert exercise.sample_answer.expected_score == 0.9
        assert exercise.sample_answer.reveal is SolutionReveal.NEVER
        assert exercise.sample_answer.content.startswith("The main risks")
        assert exercise.context == "HIPAA requires access controls on protected health information."

    def test_no_weight_warning(self, usecase_exercise_md, settings, log_messages):
        parse_exercise(usecase_exercise_md, settings)
        assert log_messages == []


class TestScenarioHeaderSplit:
    """Test the header/prose split inside scenario blocks."""

    def test_mapping_then_blank_then_prose(self, settings):
        text = MINIMAL + "::: scenario\norganization: Acme\n\nAcme is a hospital.\n:::"
        exercise = parse_exercise(text, settings)
        assert exercise.scenario.organization == "Acme"
        assert "Acme is a hospital." in exercise.scenario.content
        assert "organization:" not in exercise.scenario.content


class TestMissingUseCaseBlocks:
    """Test defaults for absent use-case blocks."""

    def test_defaults(self, settings):
        exercise = parse_exercise(MINIMAL + "Read the case study.", settings)
        assert exercise.description == "Read the case study."
        assert exercise.scenario == Scenario()
        assert exercise.prompt == UseCasePrompt()
        assert exercise.evaluation == EvaluationCriteria()
        assert exercise.sample_answer is None
        assert exercise.context is None

    def test_code_blocks_ignored(self, settings, log_messages):
        text = MINIMAL + "::: starter\n```rust\nfn main() {}\n```\n:::"
        exercise = parse_exercise(text, settings)
        assert isinstance(exercise, UseCaseExercise)
        assert not hasattr(exercise, "starter")
        assert any("not used in usecase exercises" in m for m in log_messages)
