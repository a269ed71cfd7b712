"""compose-endpoints: SSH-based discovery of published container ports."""

__version__ = "0.1.0"
