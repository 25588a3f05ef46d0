"""PackHost: FastAPI host that mounts independently authored route packs."""

__version__ = "0.1.0"
