"""Local persistent store and live queries over it."""
