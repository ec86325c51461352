"""Division strategies. Importing this package registers all of them."""

from tilegen.engine.splitters import concentric, hold, regular, unequal_halves, unequal_thirds

__all__ = ["concentric", "hold", "regular", "unequal_halves", "unequal_thirds"]
