"""
Configuration for the solver, the interactive front end and the benchmark.

The schema is a set of dataclasses; values come from an optional YAML file
and ``key=value`` overrides, merged with OmegaConf. ``benchmark.py`` gets the
same tree from hydra.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from .errors import ConfigError

SEARCH_MODES = ("recursive", "iterative")
HEURISTICS = ("first", "max_occurrence")


@dataclass
class SolverConfig:
    search: str = "recursive"
    heuristic: str = "first"
    pure_literals: bool = True
    default_value: bool = True  # value given to variables the search never touched
    record_trace: bool = False

    def validate(self) -> "SolverConfig":
        if self.search not in SEARCH_MODES:
            raise ConfigError(f"Unknown search mode {self.search!r}, expected one of {SEARCH_MODES}")
        if self.heuristic not in HEURISTICS:
            raise ConfigError(f"Unknown heuristic {self.heuristic!r}, expected one of {HEURISTICS}")
        return self


@dataclass
class BenchmarkConfig:
    n_formulas: int = 200
    var_min: int = 3
    var_max: int = 12
    clause_length: int = 3
    seed: int = 0
    cross_check: bool = True
    brute_force_max_vars: int = 10
    output: Optional[str] = "results/benchmark.json"

    def validate(self) -> "BenchmarkConfig":
        if self.n_formulas < 0:
            raise ConfigError("n_formulas must be non-negative")
        if self.var_min > self.var_max:
            raise ConfigError(f"var_min ({self.var_min}) exceeds var_max ({self.var_max})")
        if self.clause_length > self.var_min:
            raise ConfigError(
                f"clause_length ({self.clause_length}) exceeds var_min ({self.var_min})"
            )
        return self


@dataclass
class AppConfig:
    solver: SolverConfig = field(default_factory=SolverConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Sequence[str] = ()
) -> AppConfig:
    """
    Build the application config.

    Args:
        path: Optional YAML file merged over the defaults.
        overrides: Dotlist entries such as ``solver.search=iterative``.

    Returns:
        Validated AppConfig.
    """
    cfg = OmegaConf.structured(AppConfig)
    try:
        if path is not None:
            cfg = OmegaConf.merge(cfg, OmegaConf.load(path))
        if overrides:
            cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    except OmegaConfBaseException as e:
        raise ConfigError(str(e)) from e
    return from_dictconfig(cfg)


def from_dictconfig(cfg: DictConfig) -> AppConfig:
    """Convert a (hydra or OmegaConf) config tree into a validated AppConfig."""
    try:
        merged = OmegaConf.merge(OmegaConf.structured(AppConfig), cfg)
        app = OmegaConf.to_object(merged)
    except OmegaConfBaseException as e:
        raise ConfigError(str(e)) from e
    app.solver.validate()
    app.benchmark.validate()
    return app
