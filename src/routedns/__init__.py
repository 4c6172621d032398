"""routedns - DNS endpoints from Traefik routing resources."""

__version__ = "0.1.0"
