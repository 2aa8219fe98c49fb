"""Fatal documentation and coding-discipline checks for Python modules."""

__version__ = "0.1.0"
