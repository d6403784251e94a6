# tests/io/test_recorder_and_logging.py
import io
import json
import logging
import sys

from gridroute.app.build import build
from gridroute.io.business_events import RouteComputedBiz, TripArrivedBiz
from gridroute.io.kernel_logging import JsonFormatter, KernelLogging
from gridroute.io.recorder import JsonlSink, MemorySink, Recorder


class BrokenSink:
    def write(self, ev) -> None:
        raise OSError("disk full")


def unreachable_route(t=0.0):
    return RouteComputedBiz(
        run_id="t-1",
        t=t,
        name="RouteComputed",
        follower_id=0,
        origin=0,
        destination=1,
        path=[],
        total_distance=None,
    )


def arrived(t=3.0):
    return TripArrivedBiz(
        run_id="t-1",
        t=t,
        name="TripArrived",
        follower_id=0,
        node_id=2,
        travelled=120.0,
        reroutes=0,
    )


# ---------- Recorder ----------


def test_broken_sink_is_logged_and_others_still_receive(caplog):
    caplog.set_level(logging.ERROR, logger="gridroute.io.recorder")
    mem = MemorySink()
    rec = Recorder(BrokenSink(), mem)
    rec.emit(arrived())
    rec.emit(arrived(t=4.0))

    assert [ev.t for ev in mem.named("TripArrived")] == [3.0, 4.0]
    errors = [r for r in caplog.records if r.name == "gridroute.io.recorder"]
    assert len(errors) == 2
    assert errors[0].levelno == logging.ERROR
    assert errors[0].exc_info is not None
    assert "BrokenSink" in errors[0].getMessage()


def test_recorder_without_sinks_records_nothing(capsys):
    rec = Recorder()
    rec.emit(arrived())
    assert rec.sinks == ()
    assert capsys.readouterr().out == ""


def test_jsonl_sink_writes_unreachable_route_as_json():
    buf = io.StringIO()
    sink = JsonlSink(buf)
    sink.write(unreachable_route())
    sink.write(arrived())

    lines = buf.getvalue().splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["name"] == "RouteComputed"
    assert first["total_distance"] is None and first["path"] == []
    assert json.loads(lines[1])["travelled"] == 120.0


def test_build_with_jsonl_sink_on_stuck_trip():
    buf = io.StringIO()
    cfg = {
        "run_id": "t-1",
        "sim": {"seed": 1},
        "grid": {"diagonal_probability": 0.0},
        "trips": [{"t": 1.0, "follower_id": 0, "start": 0, "end": 1}],
        "obstructions": [{"t": 0.0, "node_id": 1}],
    }
    app = build(cfg, sinks=[JsonlSink(buf)], logger=logging.getLogger("tests.gridroute.io"))
    app.run()

    rows = [json.loads(line) for line in buf.getvalue().splitlines()]
    assert [r["name"] for r in rows] == ["ObstructionToggled", "RouteComputed", "TripStuck"]
    assert rows[1]["total_distance"] is None
    assert rows[-1]["node_id"] == 0 and rows[-1]["destination"] == 1


def test_build_with_empty_sink_list_stays_quiet(capsys):
    cfg = {
        "grid": {"diagonal_probability": 0.0},
        "trips": [{"follower_id": 0, "start": 0, "end": 2}],
    }
    app = build(cfg, sinks=[], logger=logging.getLogger("tests.gridroute.quiet"))
    app.run()
    assert app.recorder.sinks == ()
    assert capsys.readouterr().out == ""


# ---------- JSON formatter ----------


def make_record(msg="kernel_error", exc_info=None, **extra):
    record = logging.LogRecord(
        name="gridroute",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    if extra:
        record.extra = extra
    return record


def test_formatter_merges_extra_fields():
    out = json.loads(JsonFormatter().format(make_record("run_start", run_id="t-1", qsize=3)))
    assert out == {
        "level": "ERROR",
        "msg": "run_start",
        "logger": "gridroute",
        "run_id": "t-1",
        "qsize": 3,
    }


def test_formatter_includes_exception_text():
    try:
        raise ValueError("bad hop")
    except ValueError:
        record = make_record(exc_info=sys.exc_info(), run_id="t-1", reason="handler")

    out = json.loads(JsonFormatter().format(record))
    assert out["run_id"] == "t-1" and out["reason"] == "handler"
    assert "ValueError: bad hop" in out["exc"]


def test_kernel_logging_emits_json_lines_through_formatter():
    buf = io.StringIO()
    logger = logging.getLogger("tests.gridroute.json")
    logger.handlers.clear()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    hooks = KernelLogging(run_id="t-9", logger=logger)
    hooks.run_start(until=None, max_events=None, qsize=2)
    hooks.run_end(processed=2)

    rows = [json.loads(line) for line in buf.getvalue().splitlines()]
    assert [r["msg"] for r in rows] == ["run_start", "run_end"]
    assert all(r["run_id"] == "t-9" for r in rows)
    assert rows[1]["processed"] == 2
