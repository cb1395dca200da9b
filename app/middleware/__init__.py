"""
Middleware package for the Property Marketplace API.
"""

from .validation import ValidationMiddleware

__all__ = ["ValidationMiddleware"]
