"""Protocol definitions for Folio.

This module defines the interfaces Folio depends on but does not own, so that
markup converters can be swapped out or mocked in tests.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class MarkupConverter(Protocol):
    """Protocol for converting page markup to HTML.

    Implementations handle a single markup format.
    """

    @abstractmethod
    def render(self, markup: str) -> str:
        """Render markup to HTML.

        Args:
            markup: Source markup.

        Returns:
            Rendered HTML string.
        """
        ...
