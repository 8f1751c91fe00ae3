"""Sweep: find unused files, exports and imports in JavaScript/TypeScript projects."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sweep-code")
except PackageNotFoundError:
    __version__ = "dev"
