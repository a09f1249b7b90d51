"""
Small utilities shared across dualnet.
"""
from .logging import get_logger, set_level, get_level
