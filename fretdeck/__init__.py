"""
FretDeck Media API
OAuth session handling and provider API proxies for the practice media manager.
"""

__version__ = "1.0.0"
