"""
satdownload: sequential score-file retrieval from the vendor download API.
"""

__version__ = "1.0.0"
