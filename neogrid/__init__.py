"""Easing, cursor animation and blink timing, cursor effects, guifont parsing, frames and crash reports."""

__version__ = "0.1.0"