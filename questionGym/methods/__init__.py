from .pattern import PatternReformulator

__all__ = ["PatternReformulator"]
