"""Find restaurants near a shared location through the Kakao Local API."""

__version__ = "0.1.0"
