# Gunicorn configuration for the MedScribe service
import os
import sys

# Add src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

# Server socket
bind = f"{os.environ.get('HOST', '127.0.0.1')}:{os.environ.get('PORT', 8000)}"
backlog = 64

# Worker processes
# The recording session and the microphone belong to one process
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 100
# Note generation waits on the completion service
timeout = 150
keepalive = 2

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

# Process naming
proc_name = "medscribe"

# Server mechanics
preload_app = False
daemon = False
pidfile = None
user = None
group = None
tmp_upload_dir = None

keyfile = None
certfile = None
