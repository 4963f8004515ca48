from __future__ import annotations

import pytest


class FakeDisplay:
    """Records frames and answers prompts from a queue of replies."""

    def __init__(self, replies=None, keys=None) -> None:
        self.frames: list[list[str]] = []
        self.prompts: list[str] = []
        self.replies = list(replies or [])
        self.keys = list(keys or [])
        self.on_prompt = None

    def render(self, lines) -> bool:
        self.frames.append(list(lines))
        return True

    def request_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.on_prompt is not None:
            self.on_prompt()
        return self.replies.pop(0) if self.replies else ""

    def get_key(self):
        return self.keys.pop(0) if self.keys else None


@pytest.fixture
def display() -> FakeDisplay:
    return FakeDisplay()
