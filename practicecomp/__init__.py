"""Practice Comp - physician compensation and practice projection engine."""

__version__ = "0.4.0"
