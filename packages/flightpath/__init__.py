"""FlightPath - scroll-synchronized path animation engine."""

__version__ = "0.1.0"
