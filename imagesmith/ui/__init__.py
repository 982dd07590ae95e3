"""
imagesmith UI - User-visible output.
"""

from imagesmith.ui.console import ConsoleUI, OutputSink

__all__ = ["ConsoleUI", "OutputSink"]
