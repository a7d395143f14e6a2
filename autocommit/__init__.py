"""AI-assisted commit and rebase planner for git working trees."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("autocommit")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
