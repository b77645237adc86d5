"""
errors.py - Base error type and file helpers shared by every codec.
"""

from __future__ import annotations

import os


class FontToolError(Exception):
    """Base class for every error raised by the font tool."""


class FileError(FontToolError):
    def __init__(self, action: str, path: str, error: OSError):
        super().__init__(f"{action} {path}: {error}")
        self.action = action
        self.path = path
        self.error = error


class CreatePathError(FontToolError):
    def __init__(self, path: str, error: OSError):
        super().__init__(f"failed to create path {path}: {error}")
        self.path = path
        self.error = error


def open_file(path: str, mode: str = "rb"):
    action = "opening" if "r" in mode else "creating"
    try:
        return open(path, mode)
    except OSError as e:
        raise FileError(action, str(path), e) from e


def create_path(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise CreatePathError(str(path), e) from e
