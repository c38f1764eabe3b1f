# Gunicorn config for Render: read PORT from environment (avoids shell $PORT expansion issues)
# Run with:  gunicorn -c backend/gunicorn_config.py
import os

chdir = os.path.dirname(os.path.abspath(__file__))
wsgi_app = "app:app"
bind = f"0.0.0.0:{os.environ.get('PORT', '10000')}"
workers = 1
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
timeout = 120
