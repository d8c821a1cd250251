"""
Custom exception types for channel-mix.

Every exception carries a machine-readable code so callers can
handle specific failure modes programmatically.  The optimizer core
itself never raises for bad numeric configuration; these cover the
boundaries (plan files, catalog lookups).
"""


class ChannelMixError(Exception):
    """Base exception for all channel-mix errors."""

    def __init__(self, message: str, code: str = "CHANNEL_MIX_ERROR"):
        self.code = code
        super().__init__(message)


class PlanLoadError(ChannelMixError):
    """Raised when a run plan file is missing, unreadable, or invalid."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message, code="PLAN_LOAD_ERROR")


class ChannelNotFoundError(ChannelMixError):
    """Raised when a channel id does not exist in a channel list."""

    def __init__(self, channel_id: str):
        self.channel_id = channel_id
        super().__init__(f"Channel '{channel_id}' not found", code="CHANNEL_NOT_FOUND")
