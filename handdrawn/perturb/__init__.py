"""
Perturbation engine.

Samples shapes into points, displaces them with seeded noise (cartesian
along normals, or polar around a centre) and emits generic path commands.
"""

from handdrawn.perturb.engine import perturb, perturb_many, progression
from handdrawn.perturb.emitter import emit

__all__ = ["emit", "perturb", "perturb_many", "progression"]
