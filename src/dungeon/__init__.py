"""Turn-based dungeon crawler engine with branching Light and Shadow paths."""

__version__ = "0.1.0"
