"""nbmigrate: migrate NativeBase JSX/TSX to the Nordlys/Aurora design system."""

__version__ = "0.1.0"
