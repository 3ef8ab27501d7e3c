"""
Utility modules for azopenai.
"""

from azopenai.utils.logging import disable_logging, enable_logging

__all__ = ["enable_logging", "disable_logging"]
