"""Tiling layouts, tag helpers, state packing, status text tools, a status block runner and an IPC client for a dynamic window manager."""

__version__ = "0.1.0"

__all__ = [
    "blocks",
    "colors",
    "flextile",
    "ipc",
    "layout",
    "state",
    "status",
    "tags",
    "tilers",
]