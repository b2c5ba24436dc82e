"""
Core module - configuration, boundary models, and errors
"""

from .config import Config
from .exceptions import InvalidInputError

__all__ = ['Config', 'InvalidInputError']
