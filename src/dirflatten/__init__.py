"""
dirflatten: encode a file's directory path into its own name.
"""

__version__ = "1.0.0"
