# io/kernel_logging.py
import json
import logging
import sys
from dataclasses import asdict, is_dataclass

from gridroute.io.recorder import Recorder
from gridroute.sim.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def default_json_logger(name="gridroute", level="INFO"):
    """JSON lines on stdout for the whole `gridroute` logger tree (domain modules included)."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class KernelLogging(NoopHooks):
    """
    One place to shape and emit structured logs for kernel and routing events.
    """

    BUSINESS = {
        "TripRequested",
        "TripCancel",
        "NodeToggle",
        "ObstacleDetected",
        "TripArrived",
        "TripStuck",
    }

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or default_json_logger(level=level)
        self._processed = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(
            getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}}
        )

    def _shape_event(self, ev, want_name: bool = False):
        name = type(ev).__name__
        base = asdict(ev) if is_dataclass(ev) else {"t": getattr(ev, "t", None)}
        return (name, base) if want_name else base

    # --------------------------------------------------------

    # engine lifecycle

    def run_start(self, *, until: float | None, max_events: int | None, qsize: int):
        self._emit("INFO", "run_start", until=until, max_events=max_events, qsize=qsize)

    def run_end(self, *, processed: int, **extra):
        self._emit("INFO", "run_end", processed=processed, **extra)

    def schedule(self, ev, *, now: float, qsize: int):
        if self.debug and (qsize % self.sample_every) == 0:
            self._emit("DEBUG", "schedule", **self._shape_event(ev), now=now, qsize=qsize)

    def dispatch_start(self, ev, *, seq: int, qsize: int, handlers: int):
        self._processed += 1
        name, extra = self._shape_event(ev, want_name=True)
        level = "INFO" if name in self.BUSINESS else ("DEBUG" if self.debug else None)
        if level:
            self._emit(level, name, **extra, seq=seq, qsize=qsize, handlers=handlers)

    def dispatch_end(self, ev, *, produced: int, qsize: int, **extra):
        if self.debug and (self._processed % self.sample_every) == 0:
            self._emit("DEBUG", "dispatch_done", produced=produced, qsize=qsize, **extra)

    def error(self, ev, *, reason: str, **extra):
        name, shaped = self._shape_event(ev, want_name=True)
        self._emit("ERROR", "kernel_error", **{**shaped, **extra, "event": name, "reason": reason})

    # ------------- Business Event Reporting --------------------------

    def biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)
