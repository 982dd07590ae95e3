"""
imagesmith Steps - Build pipeline steps.
"""

from imagesmith.steps.base import BaseStep, Step
from imagesmith.steps.security_group import SecurityGroupStep

__all__ = ["BaseStep", "SecurityGroupStep", "Step"]
