"""Styling module for the QuizArena application."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
