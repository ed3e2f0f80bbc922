"""
Site Stats - visitor analytics service for a markdown publishing site
"""
__version__ = "1.0.0"
