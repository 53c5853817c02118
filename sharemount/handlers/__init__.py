"""
API Handlers Package

Contains the API endpoint handlers of the sharemount status server.
"""

from .mounts_handler import MountsHandler

__all__ = ['MountsHandler']
