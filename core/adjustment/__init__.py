"""Adjustment Module - Reasoning-service adjustment of base scores."""
from core.adjustment.client import AdjustmentClient, build_analysis, parse_adjustment

__all__ = ['AdjustmentClient', 'build_analysis', 'parse_adjustment']
