"""Catalog adapters."""

from tripline.adapters.catalog.static import DayHotelSelection, StaticAttractionSource

__all__ = ["DayHotelSelection", "StaticAttractionSource"]
