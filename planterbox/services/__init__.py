"""Application services and the container that wires them together."""
