"""
Preprocessor pipeline run on every input line before dispatch.

A preprocessor is any callable taking the current line and returning the
rewritten line. Returning an empty string means the stage consumed the line
completely (a variable assignment, for instance) and nothing is dispatched.
Raising :class:`~modeshell.utils.error_handling.PreprocessorError` rejects
the line.
"""

from typing import Callable, Iterator, List, Optional

from ..utils.logging import get_logger


Preprocessor = Callable[[str], str]


class PreprocessorPipeline:
    """Ordered chain of preprocessors; stages run in the order they were added."""

    def __init__(self):
        self._stages: List[Preprocessor] = []
        self.logger = get_logger(__name__)

    def add(self, stage: Preprocessor) -> None:
        self._stages.append(stage)
        self.logger.debug(f"Added preprocessor {stage!r} (position {len(self._stages)})")

    def run(self, line: str) -> Optional[str]:
        """Feed line through every stage.

        Returns:
            The line to dispatch, or None if a stage consumed it

        Raises:
            PreprocessorError: A stage rejected the line; later stages do not run
        """
        text = line
        for stage in self._stages:
            text = stage(text)
            if not text:
                self.logger.debug(f"Line consumed by preprocessor {stage!r}")
                return None
        return text

    def __len__(self) -> int:
        return len(self._stages)

    def __bool__(self) -> bool:
        return bool(self._stages)

    def __iter__(self) -> Iterator[Preprocessor]:
        return iter(tuple(self._stages))
