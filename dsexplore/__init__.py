"""Design-space exploration of processor configurations against energy, delay and area objectives."""

__version__ = "0.1.0"