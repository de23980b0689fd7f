"""Per-generation statistics collected during a search run."""

from dataclasses import dataclass, field
from typing import Any

from tabulate import tabulate

_HEADERS = ["generation", "expanded", "pushed", "solutions", "retained"]


@dataclass
class GenerationRecord:
    """Counts observed for one search generation.

    Attributes:
        generation: 1-based generation number.
        expanded: Frontier size handed to the generator.
        pushed: Successors pushed by the generator.
        solutions: Pushed states satisfying the goal.
        retained: Frontier size after the control hook, or None when the
            generation produced solutions and the hook was not called.
    """

    generation: int
    expanded: int
    pushed: int
    solutions: int
    retained: int | None


@dataclass
class SearchStats:
    """Mutable record of a search run, filled in by ``search(stats=...)``.

    Attributes:
        records: One entry per completed generation, in order.
    """

    records: list[GenerationRecord] = field(default_factory=list)

    def record(self, generation: int, expanded: int, pushed: int, solutions: int, retained: int | None) -> None:
        """Append the counts for one generation."""
        self.records.append(GenerationRecord(generation, expanded, pushed, solutions, retained))

    @property
    def generations(self) -> int:
        """Number of generations expanded."""
        return len(self.records)

    @property
    def total_pushed(self) -> int:
        """Total successor states pushed across all generations."""
        return sum(r.pushed for r in self.records)

    @property
    def found(self) -> bool:
        """Whether the run ended on a generation with solutions."""
        return bool(self.records) and self.records[-1].solutions > 0

    def as_rows(self) -> list[list[Any]]:
        """Return one row per generation in header order."""
        return [[r.generation, r.expanded, r.pushed, r.solutions, r.retained] for r in self.records]

    def table(self) -> str:
        """Render the per-generation counts as a plain-text table."""
        return tabulate(self.as_rows(), headers=_HEADERS, tablefmt="simple")

    def to_dict(self) -> dict[str, Any]:
        """Summarize the run as a JSON-serializable dict."""
        return {
            "generations": self.generations,
            "total_pushed": self.total_pushed,
            "found": self.found,
            "records": [dict(zip(_HEADERS, row)) for row in self.as_rows()],
        }
