"""
imagesmith - Machine image build steps for AWS.

Provides the security group provisioning step and the small
pipeline plumbing it needs to run and clean up after itself.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("imagesmith")
except PackageNotFoundError:
    # Package not installed, fallback to pyproject.toml
    __version__ = "0.1.0"

__author__ = "imagesmith Contributors"
