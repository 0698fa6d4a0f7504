"""Student achievement dashboard built on PySide6."""

__version__ = "0.1.0"
