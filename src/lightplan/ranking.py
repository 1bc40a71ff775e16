from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
import threading
import pandas as pd
from .configuration import LightConfiguration


@dataclass
class RankedConfigurationSet(Sequence):
    """
    Configurations ordered best-first by area covered.

    Insertion keeps the order non-increasing; a configuration tying with
    existing ones goes after them. Inserts are serialized by a lock so
    concurrent searches can share one set.
    """

    _items: list = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __getitem__(self, idx):
        return self._items[idx]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LightConfiguration]:
        return iter(list(self._items))

    def insert(self, config: LightConfiguration) -> int:
        """Insert in rank order and return the position it landed at."""
        if not isinstance(config, LightConfiguration):
            raise TypeError(f"Must be LightConfiguration, not {type(config).__name__}")
        area = config.area_covered
        with self._lock:
            pos = len(self._items)
            for i, existing in enumerate(self._items):
                if area > existing.area_covered:
                    pos = i
                    break
            self._items.insert(pos, config)
        return pos

    def extend(self, configs):
        for config in configs:
            self.insert(config)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    @property
    def best(self) -> LightConfiguration | None:
        return self._items[0] if self._items else None

    def top(self, n: int = 10) -> list[LightConfiguration]:
        return list(self._items[:n])

    @property
    def areas(self) -> list[float]:
        return [config.area_covered for config in self._items]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per configuration in rank order."""
        rows = [
            {
                "rank": i + 1,
                "area_covered": config.area_covered,
                "placed": config.num_placed,
                "unplaced": config.num_unplaced,
            }
            for i, config in enumerate(self._items)
        ]
        return pd.DataFrame(rows, columns=["rank", "area_covered", "placed", "unplaced"])
