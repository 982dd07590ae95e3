"""
imagesmith Pipelines.

Sequential build pipelines: each step runs in order, and every started
step is cleaned up in reverse order once the run ends or halts.
"""

from imagesmith.pipelines.builder import build_pipeline
from imagesmith.pipelines.runner import StepRunner

__all__ = ["StepRunner", "build_pipeline"]
