"""
Utility modules for Moodwave.
"""

from .logging import StructuredLogger, OperationContext

__all__ = ['StructuredLogger', 'OperationContext']
