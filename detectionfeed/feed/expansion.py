"""Expanded-row bookkeeping for the detection list."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExpansionSet:
    """Immutable set of composite ids whose detail content is showing.

    Every operation returns a new ExpansionSet; the receiver is never
    mutated. Membership is the only query the view relies on.
    """

    ids: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, ids: Iterable[str]) -> ExpansionSet:
        return cls(frozenset(ids))

    def toggle(self, composite_id: str) -> ExpansionSet:
        """Remove *composite_id* if expanded, add it otherwise."""
        if composite_id in self.ids:
            return ExpansionSet(self.ids - {composite_id})
        return ExpansionSet(self.ids | {composite_id})

    def expand_default(self, composite_id: str) -> ExpansionSet:
        """Add *composite_id* unconditionally. Already-present ids are fine."""
        if composite_id in self.ids:
            return self
        return ExpansionSet(self.ids | {composite_id})

    def is_expanded(self, composite_id: str) -> bool:
        return composite_id in self.ids

    def __contains__(self, composite_id: object) -> bool:
        return composite_id in self.ids

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.ids)
