"""linmaint — menu-driven Linux maintenance for pacman, xbps and apt systems."""

__version__ = "0.1.0"
