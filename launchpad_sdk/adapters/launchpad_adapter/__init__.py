from .adapter import LaunchpadAdapter

__all__ = ["LaunchpadAdapter"]
