# gunicorn.conf.py
import multiprocessing as mp
import os

# gunicorn -c gunicorn.conf.py wayfinder.app:app
wsgi_app = "wayfinder.app:app"
bind = os.getenv("BIND", "0.0.0.0:8077")

# Uvicorn worker for the ASGI app
worker_class = "uvicorn.workers.UvicornWorker"

# Requests are I/O bound (LLM + Places); a few workers go a long way
workers = int(os.getenv("WEB_CONCURRENCY", min(mp.cpu_count() * 2 + 1, 8)))

# Itinerary generation with several tool rounds can take a while
timeout = int(os.getenv("TIMEOUT", "180"))
graceful_timeout = int(os.getenv("GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.getenv("KEEPALIVE", "5"))

preload_app = True

forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")

# Logs
accesslog = "-" if os.getenv("ACCESS_LOG", "1") == "1" else None
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
