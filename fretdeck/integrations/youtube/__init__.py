"""
YouTube Integration Package
"""

from fretdeck.integrations.youtube.client import YouTubeClient
from fretdeck.integrations.youtube.router import router

__all__ = ["router", "YouTubeClient"]
