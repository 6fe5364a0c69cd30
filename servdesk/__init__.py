"""
servdesk - Service management administration console
"""

__version__ = "0.3.0"
