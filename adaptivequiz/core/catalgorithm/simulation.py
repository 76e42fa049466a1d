"""
Monte Carlo simulation of adaptive quiz attempts.

Simulates N takers with known abilities answering questions chosen by the CAT
algorithm, to check how long attempts run, how precise the final measure is,
and why attempts stop, for a given activity configuration.

Response model (Rasch):
    P(correct | theta, level) = 1 / (1 + exp(-(theta - b(level))))

where b(level) = convert_linear_to_logit(level, range), i.e. the same
logit scale the algorithm itself uses. Each simulated attempt mirrors the
built-in item administration: the first question is at the starting level,
every answer updates the tally, the difficulty sum, the standard error and
the measure, and the stopping rules decide whether to continue.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from adaptivequiz.core.catalgorithm._types import DifficultyRange
from adaptivequiz.core.catalgorithm.catalgo import CatAlgo
from adaptivequiz.core.catalgorithm.logit import (
    convert_linear_to_logit,
    convert_percent_to_logit,
    sigmoid,
)
from adaptivequiz.core.catalgorithm.measure_estimation import (
    estimate_measure,
    estimate_standard_error,
)
from adaptivequiz.core.catalgorithm.stopping_rules import (
    StopReason,
    check_stopping_criteria,
)
from adaptivequiz.core.question.answer_evaluation import QuestionAnswerEvaluationResult
from adaptivequiz.core.question.answered_summary import QuestionsAnsweredSummary

logger = logging.getLogger(__name__)

# Stop reason recorded when the algorithm returns an error result
ALGORITHM_ERROR_REASON = "algorithm_error"


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    n_examinees: int = 500  # Number of simulated takers
    theta_mean: float = 0.0  # Mean of the ability distribution (logits)
    theta_sd: float = 1.0  # SD of the ability distribution (logits)
    lowest_level: int = 1
    highest_level: int = 100
    starting_level: int = 50
    standard_error_percent: float = 10.0  # Activity's stopping standard error
    min_questions: int = 5
    max_questions: int = 30
    seed: int = 42  # Random seed for reproducibility


@dataclass
class ExamineeResult:
    """Per-taker simulation results."""

    true_theta: float
    measure: float  # Final ability estimate
    final_standard_error: float
    bias: float  # measure - true_theta
    questions_administered: int
    stopping_reason: str
    levels_administered: List[int] = field(default_factory=list)


@dataclass
class SimulationResult:
    """Aggregate simulation results."""

    config: SimulationConfig
    examinee_results: List[ExamineeResult]
    mean_questions: float
    median_questions: float
    mean_standard_error: float
    mean_bias: float
    rmse: float
    convergence_rate: float  # Share of attempts stopped by the standard error rule
    stopping_reason_counts: Dict[str, int]


def simulate_response(
    true_theta: float, item_logit: float, rng: np.random.Generator
) -> bool:
    """Draw a Rasch-model response of a taker to an item."""
    return bool(rng.random() < sigmoid(true_theta - item_logit))


def simulate_attempt(
    true_theta: float,
    config: SimulationConfig,
    rng: np.random.Generator,
) -> ExamineeResult:
    """Run one simulated attempt until a stopping rule fires."""
    difficulty_range = DifficultyRange(config.lowest_level, config.highest_level)
    standard_error_to_stop = convert_percent_to_logit(config.standard_error_percent / 100)
    algorithm = CatAlgo(
        return_fraction=False, default_fallback_difficulty=config.starting_level
    )

    level = config.starting_level
    levels: List[int] = []
    correct = 0
    incorrect = 0
    difficulty_sum = 0.0
    standard_error = 0.0
    measure = 0.0
    stopping_reason: Optional[str] = None

    while stopping_reason is None:
        levels.append(level)
        item_logit = convert_linear_to_logit(level, difficulty_range)
        is_correct = simulate_response(true_theta, item_logit, rng)
        if is_correct:
            correct += 1
        else:
            incorrect += 1

        questions_attempted = correct + incorrect
        difficulty_sum += item_logit
        standard_error = estimate_standard_error(questions_attempted, correct, incorrect)
        measure = estimate_measure(difficulty_sum, questions_attempted, correct, incorrect)

        decision = check_stopping_criteria(
            standard_error=standard_error,
            questions_attempted=questions_attempted,
            standard_error_threshold=standard_error_to_stop,
            min_questions=config.min_questions,
            max_questions=config.max_questions,
        )
        if decision.should_stop:
            stopping_reason = decision.reason.value
            break

        result = algorithm.determine_next_difficulty_level(
            level,
            questions_attempted,
            difficulty_range,
            standard_error_to_stop,
            QuestionAnswerEvaluationResult.CORRECT
            if is_correct
            else QuestionAnswerEvaluationResult.INCORRECT,
            QuestionsAnsweredSummary.from_integers(correct, incorrect),
        )
        if result.is_with_error:
            stopping_reason = ALGORITHM_ERROR_REASON
            break
        level = result.next_level

    return ExamineeResult(
        true_theta=true_theta,
        measure=measure,
        final_standard_error=standard_error,
        bias=measure - true_theta,
        questions_administered=len(levels),
        stopping_reason=stopping_reason,
        levels_administered=levels,
    )


def run_simulation(config: SimulationConfig) -> SimulationResult:
    """
    Simulate config.n_examinees attempts with abilities ~ N(theta_mean, theta_sd).

    Raises:
        ValueError: If n_examinees is not positive.
    """
    if config.n_examinees < 1:
        raise ValueError(f"n_examinees must be positive, got {config.n_examinees}")

    logger.info(
        f"Starting CAT simulation: N={config.n_examinees}, "
        f"theta ~ N({config.theta_mean}, {config.theta_sd}²)"
    )

    rng = np.random.default_rng(config.seed)
    true_thetas = rng.normal(
        loc=config.theta_mean, scale=config.theta_sd, size=config.n_examinees
    )
    examinee_results = [
        simulate_attempt(float(theta), config, rng) for theta in true_thetas
    ]

    result = _aggregate_results(config, examinee_results)
    logger.info(
        f"Simulation complete: mean questions={result.mean_questions:.1f}, "
        f"RMSE={result.rmse:.3f}, convergence rate={result.convergence_rate:.1%}"
    )
    return result


def _aggregate_results(
    config: SimulationConfig, examinee_results: List[ExamineeResult]
) -> SimulationResult:
    questions = np.array([r.questions_administered for r in examinee_results])
    standard_errors = np.array([r.final_standard_error for r in examinee_results])
    biases = np.array([r.bias for r in examinee_results])
    reasons = Counter(r.stopping_reason for r in examinee_results)

    return SimulationResult(
        config=config,
        examinee_results=examinee_results,
        mean_questions=float(np.mean(questions)),
        median_questions=float(np.median(questions)),
        mean_standard_error=float(np.mean(standard_errors)),
        mean_bias=float(np.mean(biases)),
        rmse=float(np.sqrt(np.mean(biases**2))),
        convergence_rate=reasons.get(StopReason.STANDARD_ERROR.value, 0)
        / len(examinee_results),
        stopping_reason_counts=dict(reasons),
    )


def generate_report(result: SimulationResult) -> str:
    """Render a plain-text summary of a simulation run."""
    config = result.config
    lines = [
        "CAT Simulation Report",
        "=" * 40,
        f"Examinees: {config.n_examinees}",
        f"Difficulty range: [{config.lowest_level}, {config.highest_level}], "
        f"starting level {config.starting_level}",
        f"Stopping: SE {config.standard_error_percent}%, "
        f"{config.min_questions}-{config.max_questions} questions",
        "",
        f"Mean questions:   {result.mean_questions:.2f}",
        f"Median questions: {result.median_questions:.1f}",
        f"Mean final SE:    {result.mean_standard_error:.4f}",
        f"Mean bias:        {result.mean_bias:+.4f}",
        f"RMSE:             {result.rmse:.4f}",
        f"Convergence rate: {result.convergence_rate:.1%}",
        "",
        "Stopping reasons:",
    ]
    for reason, count in sorted(result.stopping_reason_counts.items()):
        lines.append(f"  {reason}: {count}")

    return "\n".join(lines)
