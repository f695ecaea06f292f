"""
Campus Registry - student, course and professor pages over a hosted row store
"""

__version__ = "1.0.0"
