"""
tursofork - Fork Turso databases from CI pipelines
"""

__version__ = "1.0.0"

from .core import DatabaseForker
from .errors import ForkError

__all__ = ["DatabaseForker", "ForkError"]
