"""
subsetkit: build font subsetting specifications from command directives.
"""

__version__ = "0.1.0"
