from __future__ import annotations

import threading


class TitleTypewriter:
    """Forward-only reveal of a fixed title, one character per tick."""

    def __init__(self, full_text: str) -> None:
        self.full_text = full_text
        self._index = 0
        self._lock = threading.Lock()

    @property
    def displayed_text(self) -> str:
        return self.full_text[: self._index]

    @property
    def done(self) -> bool:
        return self._index >= len(self.full_text)

    def tick(self) -> bool:
        """Append the next character. Returns False once the title is complete."""
        with self._lock:
            if self._index >= len(self.full_text):
                return False
            self._index += 1
            return True
