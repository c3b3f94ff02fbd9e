"""Keep schema description comments in model files up to date."""

__version__ = "0.1.0"
