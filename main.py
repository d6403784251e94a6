# main.py
import sys

from gridroute.app.build import build
from gridroute.io.config import load_scenario

DEMO = {
    "name": "demo",
    "run_id": "demo-1",
    "sim": {"seed": 7},
    "trips": [{"t": 0.0, "follower_id": 0, "start": 0, "end": 79}],
    # toggled while the first hop is under way; a follower heading into either reroutes
    "obstructions": [{"t": 0.5, "node_id": 10}, {"t": 0.5, "node_id": 1}],
}


def run(cfg) -> int:
    app = build(cfg)
    return app.run()


if __name__ == "__main__":
    cfg = load_scenario(sys.argv[1]) if len(sys.argv) > 1 else DEMO
    run(cfg)
