"""
Utility helpers package.
"""
