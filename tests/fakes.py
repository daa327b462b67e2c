from typing import List, Optional

from taskgen.errors import GenerationError


class FakeModelClient:
    """Deterministic stand-in for GeminiClient.

    Returns ``steps`` for every topic, or raises ``error`` when set.
    """

    def __init__(self, steps: Optional[List[str]] = None, error: Optional[GenerationError] = None):
        self.steps = steps if steps is not None else ["Step 1", "Step 2", "Step 3"]
        self.error = error
        self.calls: List[str] = []

    def generate_steps(self, topic: str) -> List[str]:
        self.calls.append(topic)
        if self.error is not None:
            raise self.error
        return list(self.steps)
