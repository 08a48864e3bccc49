"""
global_config.py
Central configuration for the zip overlay, including debug output and the
text decoding applied to archive entries.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""


class GlobalConfig:
    _defaults = {
        "debug_level": 0,
        "text_encoding": "utf-8",
        # surrogateescape keeps arbitrary entry bytes recoverable from the text
        "text_errors": "surrogateescape",
    }
    _settings = _defaults.copy()

    @classmethod
    def set(cls, key, value):
        cls._settings[key] = value

    @classmethod
    def get(cls, key):
        return cls._settings.get(key, cls._defaults.get(key))

    @classmethod
    def has(cls, key) -> bool:
        return key in cls._settings or key in cls._defaults

    @classmethod
    def keys(cls):
        return list(dict.fromkeys(list(cls._defaults) + list(cls._settings)))

    @classmethod
    def reset(cls, key=None):
        if key is None:
            cls._settings = cls._defaults.copy()
        else:
            if key in cls._defaults:
                cls._settings[key] = cls._defaults[key]
            else:
                cls._settings.pop(key, None)

    @classmethod
    def set_debug_level(cls, value: int):
        cls.set("debug_level", int(value))

    @classmethod
    def get_debug_level(cls) -> int:
        return cls.get("debug_level")

    @classmethod
    def get_text_encoding(cls):
        return cls.get("text_encoding"), cls.get("text_errors")
