"""
mentionkit - mention trigger detection and asynchronous suggestion lookup.
"""

__version__ = "0.1.0"
