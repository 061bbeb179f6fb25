"""
Alligator - minimal social networking backend
"""

__version__ = "1.0.0"
