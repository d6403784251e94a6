from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class SimModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    seed: int = 0
    duration: float | None = None  # seconds; None runs until the queue drains


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1


# ----------------- TOPOLOGY ---------------------


class GridTopologyModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    node_count: int = 80
    grid_width: int = 9
    spacing: float = 60.0
    origin: tuple[float, float] = (100.0, 100.0)
    diagonal_probability: float = 0.3

    @field_validator("node_count", "grid_width", "spacing")
    @classmethod
    def _positive(cls, v, info: ValidationInfo):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("diagonal_probability")
    @classmethod
    def _probability(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("diagonal_probability must be within [0, 1]")
        return v


# ----------------- SOLVERS ---------------------


class SolverLinearScanModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["linear_scan"] = "linear_scan"


class SolverHeapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["heap"] = "heap"


SolverUnion = Annotated[
    SolverLinearScanModel | SolverHeapModel,
    Field(discriminator="kind"),
]

# ----------------- FOLLOWER ---------------------


class FollowerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    hop_s: float = 1.0
    reroute_delay_s: float = 1.0

    @field_validator("hop_s", "reroute_delay_s")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


# ----------------- SCRIPTED INPUTS ---------------------


class TripModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    t: float = 0.0
    follower_id: int = 0
    start: int
    end: int

    @field_validator("t")
    @classmethod
    def _nonneg_t(cls, v: float) -> float:
        if v < 0:
            raise ValueError("t must be >= 0")
        return v


class ObstructionModel(BaseModel):
    """Flip node_id's blocked flag at time t (listing a node twice unblocks it)."""

    model_config = ConfigDict(extra="forbid")
    t: float = 0.0
    node_id: int

    @field_validator("t")
    @classmethod
    def _nonneg_t(cls, v: float) -> float:
        if v < 0:
            raise ValueError("t must be >= 0")
        return v


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "default"
    run_id: str = "local"
    sim: SimModel = SimModel()
    log: LogModel = LogModel()
    grid: GridTopologyModel = Field(default_factory=GridTopologyModel)
    solver: SolverUnion = Field(default_factory=SolverLinearScanModel)
    follower: FollowerModel = FollowerModel()
    trips: list[TripModel] = Field(default_factory=list)
    obstructions: list[ObstructionModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_followers(self):
        ids = [trip.follower_id for trip in self.trips]
        if len(ids) != len(set(ids)):
            raise ValueError("each trip needs its own follower_id")
        return self
