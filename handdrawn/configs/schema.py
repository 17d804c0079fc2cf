"""YAML schema validation for perturbation settings.

Validates the ``perturbation`` section (and each entry of ``profiles``) of
``perturb.yaml`` with pydantic, so that a bad file fails fast with the
offending key and expected range in the message.

Ranges:
    - amplitude, frequency: >= 0 (coordinate units / per coordinate unit)
    - octaves, samples: >= 1
    - persistence: [0.0, 1.0]
    - lacunarity: > 0
"""

from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class PerturbationSchema(BaseModel):
    """One complete set of perturbation parameters."""
    model_config = ConfigDict(extra="forbid")

    amplitude: float = Field(10.0, ge=0.0, description="Max displacement in coordinate units")
    frequency: float = Field(0.1, ge=0.0, description="Spatial frequency of the noise field")
    octaves: int = Field(1, ge=1, le=16, description="Noise layers")
    persistence: float = Field(0.5, ge=0.0, le=1.0, description="Amplitude falloff per octave")
    lacunarity: float = Field(2.0, gt=0.0, description="Frequency growth per octave")
    seed: float = Field(0, description="Noise seed (any real number)")
    samples: int = Field(100, ge=1, description="Sample points per shape")
    mode: Literal["auto", "cartesian", "polar"] = "auto"


class ProfileOverrides(BaseModel):
    """Partial parameter set merged over the defaults."""
    model_config = ConfigDict(extra="forbid")

    amplitude: Optional[float] = Field(None, ge=0.0)
    frequency: Optional[float] = Field(None, ge=0.0)
    octaves: Optional[int] = Field(None, ge=1, le=16)
    persistence: Optional[float] = Field(None, ge=0.0, le=1.0)
    lacunarity: Optional[float] = Field(None, gt=0.0)
    seed: Optional[float] = None
    samples: Optional[int] = Field(None, ge=1)
    mode: Optional[Literal["auto", "cartesian", "polar"]] = None


class PerturbFileSchema(BaseModel):
    """Top-level layout of ``perturb.yaml``."""
    model_config = ConfigDict(extra="forbid")

    perturbation: PerturbationSchema = Field(default_factory=PerturbationSchema)
    profiles: Dict[str, ProfileOverrides] = Field(default_factory=dict)
