"""Perturbation configuration.

``PerturbationConfig`` is the frozen parameter set every perturbation call
takes.  It can be built directly in code, or loaded from YAML and validated
against ``handdrawn.configs.schema``.

YAML layout (``perturb.yaml``)::

    perturbation:          # defaults
      amplitude: 10.0
      frequency: 0.1
      ...
    profiles:              # optional named overrides
      subtle: {amplitude: 1.5, octaves: 2}

Usage::

    from handdrawn.configs.loader import load_config
    cfg = load_config()                              # shipped defaults
    cfg = load_config(profile="sketchy")             # shipped profile
    cfg = load_config("/custom/perturb.yaml", "ink") # explicit file
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal, Mapping

from pydantic import ValidationError

from handdrawn.configs.schema import PerturbFileSchema
from handdrawn.utils.fs import load_yaml

logger = logging.getLogger(__name__)

Mode = Literal["auto", "cartesian", "polar"]
MODES: tuple[str, ...] = ("auto", "cartesian", "polar")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "perturb.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PerturbationConfig:
    """Parameters for one perturbation call.

    Parameters
    ----------
    amplitude : float
        Maximum displacement, in the same unit as the shape coordinates.
    frequency : float
        Spatial scale of the noise field.  Cartesian mode samples noise at
        ``point * frequency``; polar mode samples it on a circle of radius
        ``frequency`` in noise space.
    octaves : int
        Noise layers.  1 uses plain gradient noise, more uses fractal noise.
    persistence : float
        Amplitude falloff per octave.
    lacunarity : float
        Frequency growth per octave.
    seed : float
        Noise seed; equal seeds give identical output.
    samples : int
        Number of points sampled along each shape.
    mode : ``"auto"`` | ``"cartesian"`` | ``"polar"``
        Displacement strategy.  ``"auto"`` is polar for closed shapes and
        cartesian for open ones.

    Notes
    -----
    Numeric ranges are not checked here; values loaded through
    ``load_config`` are validated by the YAML schema.
    """

    amplitude: float = 10.0
    frequency: float = 0.1
    octaves: int = 1
    persistence: float = 0.5
    lacunarity: float = 2.0
    seed: float = 0
    samples: int = 100
    mode: Mode = "auto"

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(
                f"mode must be one of {MODES}, got {self.mode!r}"
            )

    def with_overrides(self, **overrides: Any) -> PerturbationConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides) if overrides else self

    def resolve_mode(self, closed: bool) -> str:
        """Concrete strategy for a shape of the given closed-ness."""
        if self.mode == "auto":
            return "polar" if closed else "cartesian"
        return self.mode


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def config_from_mapping(
    data: Mapping[str, Any] | None,
    profile: str | None = None,
) -> PerturbationConfig:
    """Validate an in-memory mapping with the ``perturb.yaml`` layout.

    Parameters
    ----------
    data : Mapping | None
        Parsed YAML.  ``None`` or ``{}`` yields the built-in defaults.
    profile : str | None
        Name of an entry under ``profiles`` to merge over the defaults.

    Returns
    -------
    PerturbationConfig

    Raises
    ------
    ConfigError
        If the mapping fails schema validation or *profile* is unknown.
    """
    try:
        parsed = PerturbFileSchema.model_validate(dict(data or {}))
    except ValidationError as e:
        raise ConfigError(f"Invalid perturbation config: {e}") from e

    values = parsed.perturbation.model_dump()

    if profile is not None:
        if profile not in parsed.profiles:
            raise ConfigError(
                f"Unknown profile '{profile}'. Available: {sorted(parsed.profiles)}"
            )
        overrides = parsed.profiles[profile].model_dump(exclude_none=True)
        logger.debug("Applying profile %r: %s", profile, overrides)
        values.update(overrides)

    return PerturbationConfig(**values)


def load_config(
    path: str | Path | None = None,
    profile: str | None = None,
) -> PerturbationConfig:
    """Load and validate perturbation settings from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to a ``perturb.yaml``.  ``None`` loads the file shipped
        alongside this module.
    profile : str | None
        Optional named profile to merge over the file's defaults.

    Returns
    -------
    PerturbationConfig
        Validated, frozen configuration.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ConfigError
        If the file is empty or any field fails validation.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading perturbation config from %s", path)

    data = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, Mapping):
        raise ConfigError(
            f"Configuration root must be a mapping, got {type(data).__name__}: {path}"
        )

    return config_from_mapping(data, profile=profile)
