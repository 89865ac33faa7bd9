#!/usr/bin/env python3
"""
Gunicorn configuration for the registration relay.
Values can be overridden through environment variables.
"""

import os

# Server socket
bind = os.environ.get("GUNICORN_BIND", "127.0.0.1:8000")
backlog = 2048

# Worker processes. The registration page posts back to this same server's
# relay endpoint, so a single sync worker would block on itself.
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
worker_class = "gthread"
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
# Must exceed the 15s webhook timeout plus the 15s relay timeout
timeout = 45
keepalive = 2

# Restart workers after this many requests
max_requests = 1000
max_requests_jitter = 50

# Logging ("-" means stdout/stderr)
accesslog = os.environ.get("GUNICORN_ACCESS_LOG", "-")
errorlog = os.environ.get("GUNICORN_ERROR_LOG", "-")
loglevel = os.environ.get("GUNICORN_LOG_LEVEL", "info")
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = "registration_relay"

# Daemon mode
daemon = False

# Preload application for better performance
preload_app = True

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

def on_starting(server):
    server.log.info("Starting registration relay")

def on_reload(server):
    server.log.info("Reloading registration relay")

def when_ready(server):
    server.log.info("Registration relay is ready. Listening on: %s", server.address)

def on_exit(server):
    server.log.info("Shutting down registration relay")
