"""gambit — chess rule engine: legality, special moves, notation, game state."""

__version__ = "0.1.0"
