"""shellbridge - tool bridge between an AI coding assistant and a remote terminal."""

__version__ = "0.1.0"
