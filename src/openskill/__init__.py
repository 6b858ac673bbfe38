"""
OpenSkill - Skill Management CLI

Create, version, organize and share the skill definitions that shape
how an AI assistant reasons and acts in specific domains.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("openskill")
except PackageNotFoundError:
    __version__ = "0.3.0"

__all__ = [
    "__version__",
]
