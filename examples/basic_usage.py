#!/usr/bin/env python3
"""
zipoverlay Example Script

This script demonstrates reading through zip archives with the zipoverlay library.

Author: Tim Hosking
GitHub: https://github.com/Munger
"""

import argparse
import sys

from zipoverlay import ArchiveFS, EntryKind


def list_contents(fs, path):
    """List the contents of a directory, including directories inside archives."""
    print(f"\nListing contents of: {path}")
    print("-" * 50)

    try:
        entries = fs.dirs.entries(path)
        for name in entries.names():
            entry, _ = entries.get(name)
            if entry.kind(fs.overlay) == EntryKind.DIR:
                print(f"{name}/")
            else:
                print(name)
    except FileNotFoundError:
        print(f"Path not found: {path}")
    except Exception as e:
        print(f"Error: {e}")


def read_file(fs, path):
    """Read and display the contents of a file."""
    print(f"\nReading file: {path}")
    print("-" * 50)

    try:
        content = fs.files.read(path)

        # Display the file content (limit to 500 chars if too large)
        if len(content) > 500:
            print(content[:500] + "... (truncated)")
        else:
            print(content)
    except FileNotFoundError:
        print(f"File not found: {path}")
    except Exception as e:
        print(f"Error: {e}")


def main():
    parser = argparse.ArgumentParser(description="Browse files inside zip archives")
    parser.add_argument("paths", nargs="+", help="Paths to list or read, e.g. project/assets.zip/icons")
    parser.add_argument("--debug", type=int, default=0, help="Debug level (0-4)")
    args = parser.parse_args()

    with ArchiveFS() as fs:
        fs.config.debug_level = args.debug
        for path in args.paths:
            if fs.dirs.exists(path):
                list_contents(fs, path)
            else:
                read_file(fs, path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
