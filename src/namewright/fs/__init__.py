"""Filesystem queries for namewright."""

from namewright.fs.probe import FileSystemProbe

__all__ = ["FileSystemProbe"]
