"""
HTTP API for channel-mix.
"""

from channel_mix.api.app import app, create_app, run_server

__all__ = ["app", "create_app", "run_server"]
