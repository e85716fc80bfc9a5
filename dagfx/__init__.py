"""Matrices, GIF tags, fonts, display lists, GS DMA programs and disc directory tables for a console RPG engine."""

__version__ = "0.1.0"