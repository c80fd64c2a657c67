import random
from collections import Counter
from typing import Iterable, Iterator, Protocol

from .enums import TileColor


class IndexPicker(Protocol):
    """Source of randomness for tile draws: picks one index in ``range(size)``."""

    def pick_index(self, size: int) -> int: ...


class RandomIndexPicker:
    def __init__(self, seed: int | None = None, *, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def pick_index(self, size: int) -> int:
        return self.rng.randrange(size)


class TileCollection:
    """Ordered multiset of tiles.

    Hand-offs between owners are moves: ``merge`` and ``take_all`` empty the
    source, so a tile is never held by two collections at once. Queries that
    expose a collection to callers should hand out ``copy()``.
    """

    __slots__ = ("_tiles",)

    def __init__(self, tiles: Iterable[TileColor] = ()) -> None:
        self._tiles: list[TileColor] = list(tiles)

    @classmethod
    def of(cls, color: TileColor, count: int) -> "TileCollection":
        tiles = cls()
        tiles.add_tiles(color, count)
        return tiles

    def add(self, color: TileColor) -> None:
        self._tiles.append(color)

    def add_tiles(self, color: TileColor, count: int) -> None:
        if count < 0:
            raise ValueError("cannot add a negative number of tiles")
        self._tiles.extend([color] * count)

    def draw_random(self, count: int, picker: IndexPicker) -> "TileCollection":
        """Remove up to ``count`` tiles sampled without replacement.

        Asking for more tiles than are present returns everything left.
        """
        if count < 0:
            raise ValueError("cannot draw a negative number of tiles")
        drawn = TileCollection()
        for _ in range(min(count, len(self._tiles))):
            drawn.add(self._tiles.pop(picker.pick_index(len(self._tiles))))
        return drawn

    def remove_all_of_color(self, color: TileColor) -> "TileCollection":
        taken = TileCollection(t for t in self._tiles if t == color)
        self._tiles = [t for t in self._tiles if t != color]
        return taken

    def merge(self, other: "TileCollection") -> None:
        if other is self:
            return
        self._tiles.extend(other._tiles)
        other._tiles = []

    def take_all(self) -> "TileCollection":
        taken = TileCollection()
        taken._tiles, self._tiles = self._tiles, []
        return taken

    def copy(self) -> "TileCollection":
        return TileCollection(self._tiles)

    def clear(self) -> None:
        self._tiles = []

    def color_if_monochrome(self, ignore_white: bool = False) -> TileColor | None:
        colors = {t for t in self._tiles if not (ignore_white and t == TileColor.WHITE)}
        if len(colors) != 1:
            return None
        return next(iter(colors))

    def is_monochrome(self, ignore_white: bool = False) -> bool:
        return self.color_if_monochrome(ignore_white) is not None

    def contains(self, color: TileColor) -> bool:
        return color in self._tiles

    def counts(self) -> Counter:
        return Counter(self._tiles)

    def size(self) -> int:
        return len(self._tiles)

    def is_empty(self) -> bool:
        return not self._tiles

    def as_list(self) -> list[TileColor]:
        return list(self._tiles)

    def __contains__(self, color: object) -> bool:
        return color in self._tiles

    def __iter__(self) -> Iterator[TileColor]:
        return iter(list(self._tiles))

    def __len__(self) -> int:
        return len(self._tiles)

    def __bool__(self) -> bool:
        return bool(self._tiles)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TileCollection):
            return self._tiles == other._tiles
        return NotImplemented

    def __repr__(self) -> str:
        return f"TileCollection([{', '.join(t.value for t in self._tiles)}])"
