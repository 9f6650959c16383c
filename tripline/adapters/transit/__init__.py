"""Transit leg adapters."""

from tripline.adapters.transit.static import StaticTransitLegProvider

__all__ = ["StaticTransitLegProvider"]
