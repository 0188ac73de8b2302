"""Per-stage item counts reported by a provider.

A stage has no entry until its first item is counted. Callers can tell
"not started" (key absent) apart from "started" (key present).
"""

from collections.abc import Iterator, Mapping

from .types import StageResult, TransferStage


class TransferResults(Mapping[TransferStage, StageResult]):
    """Results accumulator owned by a single provider instance.

    Only the provider (through its stage counters) mutates it. Readers get
    copies of each ``StageResult`` so counts cannot be altered from outside.

    Example:
        >>> results = TransferResults()
        >>> results.increment('links')
        >>> results['links']
        {'items': 1}
        >>> 'entities' in results
        False
    """

    def __init__(self) -> None:
        self._items: dict[TransferStage, int] = {}

    def increment(self, stage: TransferStage | str) -> None:
        """Add exactly one item to ``stage``, creating the entry if absent."""
        key = TransferStage(stage)
        self._items[key] = self._items.get(key, 0) + 1

    def set_items(self, stage: TransferStage | str, items: int) -> None:
        """Overwrite the item count of ``stage``.

        Raises:
            ValueError: If items is negative
        """
        if items < 0:
            raise ValueError(f"Item count cannot be negative: {items}")
        self._items[TransferStage(stage)] = items

    def to_dict(self) -> dict[str, StageResult]:
        """Plain-dict snapshot keyed by stage name."""
        return {stage.value: StageResult(items=count) for stage, count in self._items.items()}

    def __getitem__(self, stage: TransferStage | str) -> StageResult:
        try:
            key = TransferStage(stage)
        except ValueError:
            raise KeyError(stage) from None
        if key not in self._items:
            raise KeyError(stage)
        return StageResult(items=self._items[key])

    def __iter__(self) -> Iterator[TransferStage]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"TransferResults({self.to_dict()!r})"
