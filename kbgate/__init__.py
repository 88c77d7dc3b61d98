"""kbgate - permission-gated SQL gateway for KingBase / PostgreSQL."""

__version__ = "0.1.0"
