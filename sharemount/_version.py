#!/usr/bin/env python3
"""
Version information for sharemount
Single source of truth for version number
"""

__version__ = "1.1.0"
__version_info__ = tuple(map(int, __version__.split('.')))
