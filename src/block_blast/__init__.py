"""Block Blast: a block-placement puzzle engine with pygame and gymnasium front ends."""

from .game import BlockBlastGame, GameConfig, PointerEvent, ScoringRules

__all__ = ["BlockBlastGame", "GameConfig", "PointerEvent", "ScoringRules"]
