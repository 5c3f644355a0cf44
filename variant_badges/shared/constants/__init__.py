"""
Application constants for Variant Badges
"""

from .app import *
from .badges import *

__all__ = app.__all__ + badges.__all__
