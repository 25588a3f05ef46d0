"""
Gunicorn configuration for PackHost production deployment.

Usage:
    gunicorn packhost.main:app -c gunicorn.conf.py

Each worker imports packhost.main and runs pack discovery/mounting once.
"""

import multiprocessing

# Bind to all interfaces on port 8000
bind = "0.0.0.0:8000"

# Worker processes: CPU cores * 2 + 1 (Gunicorn recommendation)
workers = multiprocessing.cpu_count() * 2 + 1

# Use Uvicorn's ASGI worker for FastAPI
worker_class = "uvicorn.workers.UvicornWorker"

# A pack whose register() hangs stalls worker boot; give startup room
timeout = 60

# Keep-alive connections (seconds)
keepalive = 5

# Logging
accesslog = "-"  # stdout
errorlog = "-"   # stderr
loglevel = "info"
