"""
Completion registry for command-line input.

Every command added to a mode registers its absolute name here. Backends
ask the registry to complete the text before the cursor when the user hits
the completion key.
"""

import os
from typing import Iterable, Iterator, List, Optional, Tuple

from .types import CompletionCallback, CompletionResult
from ..utils.logging import get_logger


class CompletionRegistry:
    """Insertion-ordered set of completion candidates.

    The registry only collects the candidates matching a prefix; choosing
    what ends up on the command line is left to the callback set with
    :meth:`set_callback`.
    """

    def __init__(self, entries: Optional[Iterable[str]] = None,
                 callback: Optional[CompletionCallback] = None):
        self._entries: List[str] = []
        self._callback = callback
        self.logger = get_logger(__name__)

        for entry in entries or ():
            self.add(entry)

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    @property
    def callback(self) -> Optional[CompletionCallback]:
        return self._callback

    def add(self, entry: str) -> bool:
        """Add a candidate.

        Returns:
            False if the entry was already registered
        """
        if entry in self._entries:
            return False
        self._entries.append(entry)
        return True

    def remove(self, entry: str) -> bool:
        """Remove a candidate.

        Returns:
            False if the entry was not registered
        """
        try:
            self._entries.remove(entry)
        except ValueError:
            return False
        return True

    def replace(self, entries: Iterable[str]) -> None:
        """Swap the whole candidate collection for a new one."""
        self._entries = list(dict.fromkeys(entries))
        self.logger.debug(f"Replaced completions ({len(self._entries)} entries)")

    def set_callback(self, callback: Optional[CompletionCallback]) -> None:
        self._callback = callback

    def matches(self, prefix: str) -> List[str]:
        """All candidates starting with prefix, in registration order."""
        return [entry for entry in self._entries if entry.startswith(prefix)]

    def complete(self, prefix: str) -> Tuple[CompletionResult, str]:
        """Complete prefix by handing the matching candidates to the callback.

        Returns:
            ``(NO_HANDLER, "")`` without a callback, ``(NOT_FOUND, "")`` for an
            empty registry, otherwise ``(COMPLETED, <callback result>)``
        """
        if self._callback is None:
            return CompletionResult.NO_HANDLER, ""
        if not self._entries:
            return CompletionResult.NOT_FOUND, ""
        return CompletionResult.COMPLETED, self._callback(prefix, self.matches(prefix))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry: object) -> bool:
        return entry in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))


def longest_common_prefix(prefix: str, matches: List[str]) -> str:
    """Completion callback extending prefix as far as all matches agree."""
    if not matches:
        return prefix
    return os.path.commonprefix(matches)
