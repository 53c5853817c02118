"""
sharemount - keep GVFS Windows share mounts and their symlinks converged
"""

from ._version import __version__
