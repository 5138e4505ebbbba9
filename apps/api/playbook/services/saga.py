"""Sequential writes across independent stores with best-effort compensation."""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Compensation = Callable[[], Awaitable[Any]]


class Saga:
    """Runs steps in order. When a step fails, compensations of the completed steps run in
    reverse order and the step's own error is re-raised, whatever the compensations do."""

    def __init__(self, name: str):
        self.name = name
        self._compensations: list[tuple[str, Compensation]] = []
        self.compensation_errors: list[tuple[str, Exception]] = []

    async def step(
        self,
        name: str,
        action: Callable[[], Awaitable[T]],
        compensation: Optional[Compensation] = None,
        *,
        compensate_on_failure: bool = False,
    ) -> T:
        """Run one step.

        compensate_on_failure registers the compensation before the action runs, for steps
        whose failure may still leave a partial write behind (an index call that timed out).
        """
        if compensation is not None and compensate_on_failure:
            self._compensations.append((name, compensation))
        try:
            result = await action()
        except Exception:
            logger.warning("%s: step %s failed, compensating", self.name, name)
            await self._compensate()
            raise
        if compensation is not None and not compensate_on_failure:
            self._compensations.append((name, compensation))
        return result

    async def _compensate(self) -> None:
        while self._compensations:
            name, compensation = self._compensations.pop()
            try:
                await compensation()
            except Exception as e:
                logger.exception("%s: compensation of %s failed", self.name, name)
                self.compensation_errors.append((name, e))
