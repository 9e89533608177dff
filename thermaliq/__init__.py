"""HVAC setback recommendations from a lumped thermal model of the building."""
from .strategy import analyze

__all__ = ['analyze']
