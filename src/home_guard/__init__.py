"""Home Guard Edge - alarm decision engine with camera cat detection."""

__version__ = "1.0.0"
