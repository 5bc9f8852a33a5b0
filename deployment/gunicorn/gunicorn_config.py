"""
Gunicorn settings for the console API.

    gunicorn core.wsgi:application -c deployment/gunicorn/gunicorn_config.py
"""
import multiprocessing
import os

bind = os.getenv("GUNICORN_BIND", "127.0.0.1:8000")
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
timeout = 60
keepalive = 5

# Logging ("-" = stdout/stderr)
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
access_log_format = '%(h)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

proc_name = "queencell-api"
daemon = False


def when_ready(server):
    server.log.info("Queen cell console API ready, spawning workers")


def worker_abort(worker):
    worker.log.info(f"Worker {worker.pid} received SIGABRT (request timeout?)")
