"""
Hyperband Reader Core

Configuration constants, data classes, exceptions and logging setup.
"""
