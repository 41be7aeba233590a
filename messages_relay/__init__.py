"""Messages Relay

A reverse proxy that rewrites Anthropic Messages API requests for an
API-compatible backend.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("messages-relay")
except PackageNotFoundError:
    # Running from a source checkout
    __version__ = "1.0.0"
__author__ = "Messages Relay"
