"""Interactive prompts for gitgum."""

from .picker import FuzzyPicker, PickerApp, matches

__all__ = ["FuzzyPicker", "PickerApp", "matches"]
