"""wyd: a stack-based "what you're doing" job tracker."""

__version__ = "0.4.0"
