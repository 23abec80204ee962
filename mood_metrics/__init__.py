"""
mood-metrics: MOOD object-oriented design metrics for class hierarchies.
"""

__version__ = "0.1.0"
