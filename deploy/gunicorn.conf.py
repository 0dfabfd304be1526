# Gunicorn configuration
import multiprocessing

wsgi_app = "wsgi:app"
bind = "0.0.0.0:3000"
workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "sync"
timeout = 60
keepalive = 5
errorlog = "-"
accesslog = "-"
loglevel = "info"
