"""Participant selection."""

from bracketeer.selection.algorithm import SelectionAlgorithm, SelectionConfig, select

__all__ = ["SelectionAlgorithm", "SelectionConfig", "select"]
