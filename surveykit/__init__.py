"""Interactive terminal prompts, and storing their answers on your own objects."""

__version__ = "0.1.0"