"""Growing text buffer that collects alert messages."""

from __future__ import annotations

from dataclasses import dataclass

EMPTY_PLACEHOLDER = "(vacío)"


@dataclass
class MessageList:
    """Accumulates text messages into one string."""

    text: str = ""

    def add(self, text: str) -> None:
        """Append ``text`` to the end of the buffer."""
        self.text += text

    def clear(self) -> None:
        """Empty the buffer."""
        self.text = ""

    def render(self) -> str:
        """Return a one-line debugging view of the buffer."""
        return f"» {self.text or EMPTY_PLACEHOLDER}\n"

    def __len__(self) -> int:
        return len(self.text)

    def __bool__(self) -> bool:
        return bool(self.text)

    def __str__(self) -> str:
        return self.text