"""Deterministic random-walk terrain generator."""

from .core import generate, generate_many, HeightField, LevelParameters, InvalidParameterError

__version__ = "0.1.0"

__all__ = ['generate', 'generate_many', 'HeightField', 'LevelParameters', 'InvalidParameterError']
