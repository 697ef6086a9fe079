"""
freetimefinder - free/busy timelines from recurring weekly availability.
"""

__version__ = "0.1.0"
