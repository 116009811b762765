"""Syncopation analysis CLI module."""

from .syncopation_cli import main

__all__ = ['main']
