# src/gridroute/io/config.py
import json
from pathlib import Path

from gridroute.config.models import ScenarioModel


def load_scenario(path: str | Path) -> ScenarioModel:
    """Read a JSON scenario file; raises pydantic.ValidationError on bad content."""
    with open(path, encoding="utf-8") as f:
        return ScenarioModel.model_validate(json.load(f))
