"""calloutsync - keep callout fold markers and rendered callouts in step."""

__version__ = "0.1.0"
