from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Union

from .lib.command import ChainResult
from .reporting import StatusReporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """A labelled unit of work: one short chain of external commands."""

    step_id: str
    label: str
    action: Callable[[], ChainResult] = field(compare=False)


@dataclass(frozen=True)
class Completed:
    ran_steps: List[str]


@dataclass(frozen=True)
class FailedAt:
    index: int  # 1-based position of the failing step
    label: str
    cause: str
    ran_steps: List[str]


PipelineResult = Union[Completed, FailedAt]


def run_pipeline(
    *,
    steps: Sequence[Step],
    reporter: StatusReporter,
) -> PipelineResult:
    """Run steps strictly in order; stop at the first failure.

    Nothing is retried or undone. A failed step leaves the disk as the last
    successful step left it.
    """

    ran: List[str] = []

    for index, step in enumerate(steps, start=1):
        logger.info("Running step %s (%s)", step.step_id, step.label)
        reporter.starting(step.label)

        try:
            result = reporter.track(step.action)
        except Exception as e:
            logger.exception("Step %s raised", step.step_id)
            result = ChainResult(
                ok=False,
                completed=0,
                failed_link=step.step_id,
                detail=f"{type(e).__name__}: {e}",
            )
        ran.append(step.step_id)

        if not result.ok:
            logger.error("Step %s failed: %s", step.step_id, result.cause)
            reporter.failed(step.label, result.cause)
            return FailedAt(index=index, label=step.label, cause=result.cause, ran_steps=ran)

        reporter.succeeded(step.label)

    logger.info("All %d steps completed", len(ran))
    return Completed(ran_steps=ran)
