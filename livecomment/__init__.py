"""Livestream comments with NG word moderation and abuse reports."""

__version__ = "0.1.0"
