from .tracker import LevelStatus, ProgressionTracker

__all__ = ["ProgressionTracker", "LevelStatus"]
