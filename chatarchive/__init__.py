"""Local archive for exported chat-assistant conversations."""

__version__ = "0.1.0"
