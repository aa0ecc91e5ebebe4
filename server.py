"""
ForageSim Server  –  Flask + Server-Sent Events
===============================================

Endpoints:
  GET  /world        Animals (x, y, rotation) and foods (x, y) as JSON
  POST /step         Advance the simulation by one step
  POST /train        Fast-forward to the end of the current generation
  POST /reset        New random simulation (optional JSON body: {"seed": 42})
  POST /start        Train generations in the background (JSON config body)
  POST /stop         Stop background training
  GET  /stream       SSE stream – one event per finished generation
  GET  /status       Current sim state as JSON

Run:
  python server.py
  # → http://localhost:5000
"""

import threading
import queue
import json

import numpy as np
from flask import Flask, Response, request, jsonify

from simulation import Simulation
from config import (
    ANIMAL_COUNT, FOOD_COUNT, GENERATION_LENGTH,
    MUTATION_CHANCE, MUTATION_COEFF,
)

# ──────────────────────────────────────────────────────────────────────────────
app = Flask(__name__)

# Global simulation state.  The lock serialises every access to _sim/_rng,
# whether it comes from a request or from the training thread.
_sim_lock    = threading.Lock()
_rng         = np.random.default_rng()
_sim         = Simulation.random(_rng)

_sim_thread: threading.Thread | None = None
_stop_event  = threading.Event()
_gen_queue   = queue.Queue(maxsize=200)   # holds dicts to stream
_sim_status  = {
    "running":    False,
    "generation": 0,
    "max_gen":    0,
    "cfg":        {},
}
_status_lock = threading.Lock()


# ──────────────────────────────────────────────────────────────────────────────
# CORS helper – allow a browser front-end on any origin to call us
# ──────────────────────────────────────────────────────────────────────────────

@app.after_request
def add_cors(response):
    response.headers["Access-Control-Allow-Origin"]  = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response

@app.route("/", methods=["OPTIONS"])
@app.route("/<path:p>", methods=["OPTIONS"])
def preflight(p=""):
    return Response(status=200)


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────

def _build_cfg(data: dict) -> dict:
    """Merge request JSON with defaults."""
    return {
        "animals":           int(data.get("animals",          ANIMAL_COUNT)),
        "foods":             int(data.get("foods",            FOOD_COUNT)),
        "generation_length": int(data.get("generationLength", GENERATION_LENGTH)),
        "max_generations":   int(data.get("maxGenerations",   100)),
        "mutation_chance":   float(data.get("mutationChance", MUTATION_CHANCE)),
        "mutation_coeff":    float(data.get("mutationCoeff",  MUTATION_COEFF)),
        "seed":              data.get("seed"),
    }


def _new_simulation(cfg: dict):
    global _sim, _rng
    _rng = np.random.default_rng(cfg["seed"])
    _sim = Simulation.random(
        _rng,
        animals           = cfg["animals"],
        foods             = cfg["foods"],
        generation_length = cfg["generation_length"],
        mutation_chance   = cfg["mutation_chance"],
        mutation_coeff    = cfg["mutation_coeff"],
    )


def _stats_payload(stats) -> dict:
    return {**stats.as_dict(), "summary": str(stats)}


def _stop_worker():
    _stop_event.set()
    if _sim_thread and _sim_thread.is_alive():
        _sim_thread.join(timeout=3)


# ──────────────────────────────────────────────────────────────────────────────
# Training thread
# ──────────────────────────────────────────────────────────────────────────────

def _sim_worker(max_generations: int, stop_evt: threading.Event,
                out_q: queue.Queue):
    """Train generations one by one; push each generation into the queue."""
    with _status_lock:
        _sim_status["running"] = True

    try:
        for _ in range(max_generations):
            if stop_evt.is_set():
                break
            # stop is only checked between generations
            with _sim_lock:
                stats   = _sim.train(_rng)
                gen_idx = _sim.generation
                world   = _sim.world.as_dict()

            with _status_lock:
                _sim_status["generation"] = gen_idx

            payload = {"type": "generation", "gen": gen_idx,
                       "maxGen": max_generations,
                       "stats": _stats_payload(stats), "world": world}

            # Non-blocking put; drop oldest frame if queue full
            if out_q.full():
                try:
                    out_q.get_nowait()
                except queue.Empty:
                    pass
            out_q.put(payload)
    finally:
        with _status_lock:
            _sim_status["running"] = False
        out_q.put({"type": "done", "gen": _sim_status["generation"]})


# ──────────────────────────────────────────────────────────────────────────────
# Routes
# ──────────────────────────────────────────────────────────────────────────────

@app.route("/world", methods=["GET"])
def world():
    with _sim_lock:
        return jsonify({**_sim.world.as_dict(),
                        "age": _sim.age, "generation": _sim.generation})


@app.route("/step", methods=["POST"])
def step():
    with _sim_lock:
        stats = _sim.step(_rng)
        body  = {"age": _sim.age, "generation": _sim.generation,
                 "stats": _stats_payload(stats) if stats is not None else None}
    return jsonify(body)


@app.route("/train", methods=["POST"])
def train():
    with _sim_lock:
        stats = _sim.train(_rng)
        body  = {"generation": _sim.generation, "stats": _stats_payload(stats)}
    return jsonify(body)


@app.route("/reset", methods=["POST"])
def reset():
    _stop_worker()
    cfg = _build_cfg(request.get_json(silent=True) or {})
    with _sim_lock:
        _new_simulation(cfg)
    with _status_lock:
        _sim_status["generation"] = 0
        _sim_status["cfg"]        = cfg
    return jsonify({"status": "reset", "cfg": cfg})


@app.route("/start", methods=["POST"])
def start():
    global _sim_thread, _stop_event, _gen_queue

    # Stop any running training
    _stop_worker()

    # Reset
    _stop_event = threading.Event()
    _gen_queue  = queue.Queue(maxsize=200)
    cfg = _build_cfg(request.get_json(silent=True) or {})
    with _sim_lock:
        _new_simulation(cfg)
    with _status_lock:
        _sim_status["generation"] = 0
        _sim_status["running"]    = False
        _sim_status["cfg"]        = cfg
        _sim_status["max_gen"]    = cfg["max_generations"]

    _sim_thread = threading.Thread(
        target=_sim_worker,
        args=(cfg["max_generations"], _stop_event, _gen_queue),
        daemon=True,
    )
    _sim_thread.start()
    return jsonify({"status": "started", "cfg": cfg})


@app.route("/stop", methods=["POST"])
def stop():
    _stop_event.set()
    return jsonify({"status": "stopped"})


@app.route("/status", methods=["GET"])
def status():
    with _status_lock:
        return jsonify(dict(_sim_status))


@app.route("/stream", methods=["GET"])
def stream():
    """SSE endpoint – browser subscribes and receives each generation as an event."""
    q = _gen_queue

    def event_gen():
        # Send a hello so the browser knows it's connected
        yield "data: {\"type\": \"connected\"}\n\n"

        while True:
            try:
                payload = q.get(timeout=1)
                yield f"data: {json.dumps(payload)}\n\n"
                if payload.get("type") == "done":
                    break
            except queue.Empty:
                # Keep-alive ping
                yield "data: {\"type\": \"ping\"}\n\n"

    return Response(
        event_gen(),
        mimetype="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",    # disable nginx buffering if behind proxy
        },
    )


# ──────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    print("=" * 50)
    print("  ForageSim Server  →  http://localhost:5000")
    print("  SSE stream        →  http://localhost:5000/stream")
    print("=" * 50)
    app.run(host="0.0.0.0", port=5000, threaded=True, debug=False)
