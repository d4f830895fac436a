"""
Utility helpers for runtests.
"""
