"""classdiff - report which compilation units changed across a release history."""

__version__ = "0.1.0"
