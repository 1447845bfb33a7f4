"""
khinsider-cli: downloads album artwork and audio tracks into a per-album folder.
"""

__version__ = "1.0.0"
