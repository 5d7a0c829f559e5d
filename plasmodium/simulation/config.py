"""Config — load simulation parameters from YAML files.

Run-level settings (grid size, seed, random placement odds) live on
``SimulationConfig``.  The physics tunables used by the grid, the energy
model and the Metropolis engine are grouped in the frozen
``ModelConstants`` so they can be handed to each component at
construction instead of being read from module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class ModelConstants:
    """Tunables for the chemical field, Hamiltonian and acceptance rule.

    Attributes:
        cohesion_attr: Peak field contribution of an organism cell.
        cohesion_attr_decay: Per-ring drop of the cohesion contribution.
        food_attr: Peak field contribution of a food cell.
        food_attr_decay: Per-ring drop of the food contribution.
        obstacle_rep: Peak field contribution of an obstacle (negative).
        obstacle_attr_decay: Per-ring drop of the obstacle contribution.
        ideal_volume: Target organism cells per connected food source.
        volume_weight: Weight of the volume deviation in the energy.
        yield_offset: Energy drop below which a change is always taken.
        fluctuation_amplitude: Temperature of the acceptance rule.
        preserve_connectivity: Reject organism removals that
            ``will_break_if_lost`` flags.  Off by default.
    """

    cohesion_attr: float = 2.0
    cohesion_attr_decay: float = 1.0
    food_attr: float = 5.0
    food_attr_decay: float = 1.0
    obstacle_rep: float = -6.0
    obstacle_attr_decay: float = 1.0
    ideal_volume: float = 60.0
    volume_weight: float = 0.1
    yield_offset: float = 0.5
    fluctuation_amplitude: float = 0.5
    preserve_connectivity: bool = False

    def __post_init__(self) -> None:
        """Reject values the field and acceptance maths cannot use."""
        for name in ("cohesion_attr_decay", "food_attr_decay", "obstacle_attr_decay"):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ValueError(msg)
        if self.fluctuation_amplitude <= 0:
            msg = (
                "fluctuation_amplitude must be positive, "
                f"got {self.fluctuation_amplitude}"
            )
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModelConstants:
        """Build constants from a mapping, keeping defaults for gaps.

        Args:
            data: Mapping of field name to value.

        Returns:
            A populated ModelConstants instance.

        Raises:
            ValueError: If ``data`` names an unknown constant.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"unknown model constants: {', '.join(unknown)}"
            raise ValueError(msg)
        return cls(**data)


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        grid_width: Number of grid columns.
        grid_height: Number of grid rows.
        food_prob: Chance that a tile starts as food.
        obstacle_prob: Chance that a non-food tile starts as an obstacle.
        stale_limit: Steps without any change before a run counts as
            stalled.
        log_level: Root logging level used by the CLI.
        model: Physics tunables shared by all components.
    """

    seed: int = 42
    grid_width: int = 80
    grid_height: int = 60
    food_prob: float = 0.012
    obstacle_prob: float = 0.006
    stale_limit: int = 20
    log_level: str = "INFO"

    model: ModelConstants = field(default_factory=ModelConstants)

    def __post_init__(self) -> None:
        """Validate grid dimensions and placement probabilities."""
        if self.grid_width <= 0 or self.grid_height <= 0:
            msg = (
                "grid dimensions must be positive, "
                f"got {self.grid_width}x{self.grid_height}"
            )
            raise ValueError(msg)
        for name in ("food_prob", "obstacle_prob"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"{name} must lie in [0, 1], got {value}"
                raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If the file is not valid YAML, is not a mapping,
                or holds out-of-range or unknown values.
        """
        path = Path(path)
        with path.open("r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                msg = f"{path} is not valid YAML: {exc}"
                raise ValueError(msg) from exc

        if not isinstance(data, dict):
            msg = f"{path} must hold a mapping, got {type(data).__name__}"
            raise ValueError(msg)
        model = data.get("model") or {}
        if not isinstance(model, dict):
            msg = f"model must be a mapping, got {type(model).__name__}"
            raise ValueError(msg)

        return cls(
            seed=data.get("seed", cls.seed),
            grid_width=data.get("grid_width", cls.grid_width),
            grid_height=data.get("grid_height", cls.grid_height),
            food_prob=data.get("food_prob", cls.food_prob),
            obstacle_prob=data.get("obstacle_prob", cls.obstacle_prob),
            stale_limit=data.get("stale_limit", cls.stale_limit),
            log_level=data.get("log_level", cls.log_level),
            model=ModelConstants.from_dict(model),
        )
