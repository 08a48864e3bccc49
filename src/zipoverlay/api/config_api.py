"""
Configuration operations for the zip overlay.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from zipoverlay.core.global_config import GlobalConfig


class ConfigAPI:
    """
    Public API: Configuration Operations

    Provides unified access to the global configuration (debug level, text
    decoding of archive entries).

    Examples:
        fs.config.debug_level = 2
        fs.config['text_errors'] = 'replace'
        x = fs.config.text_encoding
        fs.config.reset()
    """

    def get(self, key):
        if not GlobalConfig.has(key):
            raise KeyError(f"No global config for key '{key}'")
        return GlobalConfig.get(key)

    def set(self, key, value):
        if not GlobalConfig.has(key):
            raise KeyError(f"No global config for key '{key}'")
        if key == "debug_level":
            GlobalConfig.set_debug_level(value)
        else:
            GlobalConfig.set(key, value)

    def reset(self, key=None):
        """Reset all global config, or just a single key if provided."""
        GlobalConfig.reset(key)

    def __getattr__(self, key):
        if key.startswith('_') or not GlobalConfig.has(key):
            raise AttributeError(f"No global config for key '{key}'")
        return GlobalConfig.get(key)

    def __setattr__(self, key, value):
        if not GlobalConfig.has(key):
            raise AttributeError(f"No global config for key '{key}'")
        self.set(key, value)

    def __getitem__(self, key):
        return self.get(key)

    def __setitem__(self, key, value):
        self.set(key, value)

    def __iter__(self):
        yield from GlobalConfig.keys()

    def __len__(self):
        return len(GlobalConfig.keys())
