# ABOUTME: Composite strategy running several strategies in order under one shared budget
# ABOUTME: Lets a source use script data first and fall back to plain <img> scanning

from collections.abc import Iterator, Sequence

from ..base import ExtractionStrategy, RawCandidate
from ..document import Document


class ChainedStrategy:
    """Concatenate the candidates of several strategies until the budget is spent."""

    def __init__(self, name: str, strategies: Sequence[ExtractionStrategy]):
        self.name = name
        self.strategies = list(strategies)

    def extract(self, document: Document, budget: int) -> Iterator[RawCandidate]:
        remaining = budget
        for strategy in self.strategies:
            if remaining <= 0:
                return
            for candidate in strategy.extract(document, remaining):
                yield candidate
                remaining -= 1
