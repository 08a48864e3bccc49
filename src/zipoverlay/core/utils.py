"""
Utility functions for the zip overlay.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import errno
import os
from typing import Optional

ZIP_SUFFIX = '.zip'


def not_found_error(path: str) -> FileNotFoundError:
    """Build the canonical "no such entry" error for path."""
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


def is_not_found(err: Optional[BaseException]) -> bool:
    """True if err is the canonical "does not exist" error."""
    return isinstance(err, FileNotFoundError)


def canonicalize_error(err: Optional[BaseException]) -> Optional[BaseException]:
    """
    Map an OS error onto its canonical form.

    Walking through a regular file (for example "assets.zip/icons") raises
    NotADirectoryError; that is reported as "does not exist" so the overlay
    gets a chance to look inside the archive.
    """
    if isinstance(err, NotADirectoryError):
        return not_found_error(err.filename)
    return err
