"""Gunicorn config for serving autoledger.main:app."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each worker loads its own CustomerStore at startup
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

timeout = 60
graceful_timeout = 30
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
