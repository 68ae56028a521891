"""
isort:skip_file
"""
from .fixtures import *  # noqa: F401,F403
