"""Head Jump - jump over the obstacles, don't touch them."""

__version__ = "0.1.0"
