"""Field, group and pairing arithmetic for the BN254 curve."""

__version__ = "0.1.0"

__all__ = ["arithmetic", "fq", "fr", "fq2", "fq6", "fq12", "curve", "engine"]