"""Core engine packages for FlightPath."""
