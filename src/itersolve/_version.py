"""
Version information for the itersolve package.
"""

# Version follows semantic versioning: MAJOR.MINOR.PATCH
__version__ = "1.0.0"

# Development status
DEV_STATUS = "stable"  # alpha, beta, rc, stable
