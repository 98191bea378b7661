"""
Post-commit side effects.
"""
import inspect
import logging
from typing import Any, Callable, List, Tuple

logger = logging.getLogger(__name__)


class PostCommitHooks:
    """
    Ordered list of side effects to run once the store write has committed.

    Each step runs even if an earlier one failed; a failing step is logged
    and never reaches the request that triggered it.
    """

    def __init__(self):
        self._steps: List[Tuple[str, Callable[..., Any], tuple, dict]] = []

    def add(self, name: str, func: Callable[..., Any], *args, **kwargs) -> "PostCommitHooks":
        self._steps.append((name, func, args, kwargs))
        return self

    def __len__(self):
        return len(self._steps)

    async def run(self) -> List[str]:
        """Run every step in order. Returns the names of the steps that failed."""
        failed = []
        for name, func, args, kwargs in self._steps:
            try:
                result = func(*args, **kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Post-commit step '{name}' failed")
                failed.append(name)
        return failed
