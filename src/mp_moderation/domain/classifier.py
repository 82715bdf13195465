"""External text classifier Protocol. Implementations may be slow or down."""

from typing import Protocol

from src.mp_moderation.domain.models import ClassifierResponse


class TextClassifierProtocol(Protocol):
    async def classify(self, prompt: str) -> ClassifierResponse: ...

    async def aclose(self) -> None: ...
