#!/usr/bin/env python3
"""
app.py
------
Flask entry point for FollowCheck.
Run with:  python3 backend/app.py

Routes:
    GET  /progress   → JSON progress state
    GET  /healthz    → health check
    POST /analyze    → process a ZIP export or loose JSON files, return JSON result
"""

import os
import socket
import sys
import threading
import time
import traceback

from flask import Flask, Response, jsonify, request

_BACKEND_DIR = os.path.dirname(os.path.abspath(__file__))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

import analyzer
import config
from errors import AnalysisError
from models import UploadedFile

app = Flask(__name__)

# Production: port from env (e.g. Gunicorn); limit upload size
app.config["PORT"] = int(os.environ.get("PORT", 5000))
app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes()
app.config["LIMITS"] = config.load_limits()


# ── Progress tracking ─────────────────────────────────────────────

_log_lock = threading.Lock()
_progress = {"done": 0, "total": 0, "phase": ""}


def _on_progress(phase: str, done: int, total: int) -> None:
    """Called by analyzer as files finish. Thread-safe."""
    with _log_lock:
        _progress["phase"] = phase
        _progress["done"]  = done
        _progress["total"] = total


def _error_response(e: AnalysisError):
    return jsonify({
        "error":   True,
        "kind":    e.kind,
        "file":    e.filename,
        "reasons": [e.message],
    }), 400


# ── Routes ────────────────────────────────────────────────────────

@app.route("/progress")
def progress():
    with _log_lock:
        return jsonify(_progress)


@app.route("/healthz")
def healthz():
    """Health check for Render / load balancers."""
    return "", 200


@app.route("/analyze", methods=["POST"])
def analyze():
    if request.content_length and request.content_length > app.config["MAX_CONTENT_LENGTH"]:
        return Response("File too large", status=413, mimetype="text/plain")

    zip_file = request.files.get("zipfile")
    loose = [f for f in request.files.getlist("files") if f and f.filename]
    if not zip_file and not loose:
        return Response("No files uploaded", status=400, mimetype="text/plain")

    with _log_lock:
        _progress.update({"done": 0, "total": 0, "phase": "Preparing data..."})

    limits = app.config["LIMITS"]
    try:
        if zip_file:
            print(f"📦 ZIP file received ({zip_file.filename or 'upload.zip'}) — starting analysis...")
            result = analyzer.analyze_archive(zip_file.read(), limits, _on_progress)
        else:
            print(f"📂 {len(loose)} file(s) received — starting analysis...")
            files = [UploadedFile(name=f.filename, data=f.read()) for f in loose]
            result = analyzer.analyze_files(files, limits, _on_progress)
    except AnalysisError as e:
        print(f"⚠️  Upload rejected ({e.kind}): {e.message}")
        return _error_response(e)
    except Exception as e:
        print(f"❌ Error: {e}")
        traceback.print_exc()
        return jsonify({"error": True, "reasons": ["Something went wrong. Please try again or use a valid Instagram data export."]}), 500

    print(f"📊 Following: {result.following_count} | Followers: {result.followers_count} | "
          f"Not following back: {len(result.not_following_back)}")
    with _log_lock:
        _progress.update({"phase": "Done"})
    return jsonify(result.to_dict())


@app.errorhandler(413)
def too_large(_e):
    return Response("File too large", status=413, mimetype="text/plain")


# ── Main ──────────────────────────────────────────────────────────

def _local_ip():
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError:
        return "?"


def main():
    port = int(os.environ.get("PORT", 0))
    if not port:
        with socket.socket() as s:
            s.bind(("", 0))
            port = s.getsockname()[1]

    app.config["PORT"] = port

    bind_all = os.environ.get("BIND_ALL", "").strip().lower() in ("1", "true", "yes")
    host = "0.0.0.0" if bind_all else "localhost"

    threading.Thread(
        target=lambda: app.run(host=host, port=port, debug=False,
                               use_reloader=False, threaded=True),
        daemon=True,
    ).start()

    for _ in range(30):
        try:
            with socket.create_connection(("127.0.0.1", port), timeout=0.3):
                break
        except OSError:
            time.sleep(0.1)

    url_local = f"http://127.0.0.1:{port}"
    print(f"🌐 FollowCheck API running at {url_local}")
    if bind_all:
        print(f"   Reachable from other devices at http://{_local_ip()}:{port}")
    print(f"   POST {url_local}/analyze with a 'zipfile' or one or more 'files'")
    print("⌨️  Press Ctrl+C to stop")

    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        print("\n👋 Server stopped")


if __name__ == "__main__":
    main()
