"""CLI package for ReadThat"""
from .main import cli

__all__ = ['cli']
