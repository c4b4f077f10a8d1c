"""
bingwall

Set the Bing picture of the day (or one from the past week) as your desktop wallpaper.
"""

__version__ = "0.1.0"
