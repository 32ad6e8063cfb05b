from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .config import InstallConfig
from .errors import InstallerError

logger = logging.getLogger(__name__)


@dataclass
class InstallContext:
    config: InstallConfig
    cancel: threading.Event = field(default_factory=threading.Event)
    decisions: Dict[str, Any] = field(default_factory=dict)

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run


class Step(Protocol):
    """A single fail-fast step."""

    step_id: str

    def run(self, ctx: InstallContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    failed_step: Optional[str] = None
    error: Optional[InstallerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_pipeline(ctx: InstallContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order, stopping at the first InstallerError.

    Anything that is not an InstallerError is a bug and propagates.
    """

    ran: List[str] = []

    for step in steps:
        logger.info("Running step %s", step.step_id)
        try:
            step.run(ctx)
        except InstallerError as e:
            logger.debug("Step %s failed", step.step_id, exc_info=True)
            return PipelineResult(ran_steps=ran, failed_step=step.step_id, error=e)
        ran.append(step.step_id)

    return PipelineResult(ran_steps=ran)
