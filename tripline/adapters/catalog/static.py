"""Static catalog adapters backed by already-loaded rows."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pydantic import ValidationError

from tripline.domain.enums import ItemKind
from tripline.domain.models import Hotel, MovableItem
from tripline.shared.exceptions import ToolError


class StaticAttractionSource:
    """Ordered, finite list of movable items."""

    def __init__(self, items: Iterable[MovableItem]):
        self._items = tuple(items)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]], *, kind: ItemKind = ItemKind.ATTRACTION) -> "StaticAttractionSource":
        items: list[MovableItem] = []
        for raw in rows:
            try:
                items.append(MovableItem.model_validate({"kind": kind.value, **dict(raw)}))
            except ValidationError as exc:
                raise ToolError("static_catalog", f"invalid {kind.value} row {raw!r}: {exc}") from exc
        return cls(items)

    def list_items(self) -> list[MovableItem]:
        return list(self._items)


class DayHotelSelection:
    """Hotel chosen per day number; days without an entry have no hotel."""

    def __init__(self, by_day: Mapping[int, Optional[Hotel]]):
        self._by_day = dict(by_day)

    @classmethod
    def every_day(cls, hotel: Hotel, day_count: int) -> "DayHotelSelection":
        return cls({day: hotel for day in range(1, day_count + 1)})

    def hotel_for_day(self, day_number: int) -> Optional[Hotel]:
        return self._by_day.get(day_number)
