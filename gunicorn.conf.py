# gunicorn -c gunicorn.conf.py orderplacement.wsgi
import os

wsgi_app = "orderplacement.wsgi:application"
bind = os.getenv("GUNI_BIND", "0.0.0.0:8000")

# Orders and stock live in process memory: one worker, many threads.
workers = 1
worker_class = "gthread"
threads = int(os.getenv("GTHREADS", "8"))

# Timeouts
timeout = int(os.getenv("GUNI_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNI_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.getenv("GUNI_KEEPALIVE", "5"))

# No max_requests: recycling the worker would drop every stored order.
preload_app = True

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("GUNI_LOGLEVEL", "info")
