"""
Eventful: event registration and RSVP service.
"""

__version__ = "1.0.0"
