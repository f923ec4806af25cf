"""
Empirical tables used for bond inference.

Kept as plain data so they can be tuned or overlaid from a JSON file without
touching the classification code in bonds.py.
"""
import copy
import json
from dataclasses import dataclass, field
from typing import Dict, Optional

from .exceptions import BondParameterError
from .utils import normalize_element

# Covalent radii (Angstrom)
COVALENT_RADII = {
    'H': 0.31, 'He': 0.28,
    'Li': 1.28, 'Be': 0.96, 'B': 0.84, 'C': 0.76, 'N': 0.71, 'O': 0.66, 'F': 0.57, 'Ne': 0.58,
    'Na': 1.66, 'Mg': 1.41, 'Al': 1.21, 'Si': 1.11, 'P': 1.07, 'S': 1.05, 'Cl': 1.02, 'Ar': 1.06,
    'K': 2.03, 'Ca': 1.76, 'Sc': 1.70, 'Ti': 1.60, 'V': 1.53, 'Cr': 1.39, 'Mn': 1.39, 'Fe': 1.32,
    'Co': 1.26, 'Ni': 1.24, 'Cu': 1.32, 'Zn': 1.22,
    'Ga': 1.22, 'Ge': 1.20, 'As': 1.19, 'Se': 1.20, 'Br': 1.20, 'Kr': 1.16,
}
DEFAULT_RADIUS = 1.5

# d <= (r1 + r2) * TOLERANCE_FACTOR + TOLERANCE_OFFSET makes a bond candidate
TOLERANCE_FACTOR = 1.15
TOLERANCE_OFFSET = 0.1

# Typical bond lengths (Angstrom). Each pair is listed once, lookups try both orders.
BOND_LENGTHS = {
    ('C', 'C'): {'single': 1.54, 'double': 1.34, 'triple': 1.20},
    ('C', 'N'): {'single': 1.47, 'double': 1.28, 'triple': 1.16},
    ('C', 'O'): {'single': 1.43, 'double': 1.20, 'triple': 1.13},
    ('C', 'S'): {'single': 1.82, 'double': 1.60},
    ('C', 'H'): {'single': 1.09},
    ('C', 'F'): {'single': 1.35},
    ('C', 'Cl'): {'single': 1.77},
    ('C', 'Br'): {'single': 1.94},
    ('C', 'I'): {'single': 2.14},
    ('N', 'N'): {'single': 1.45, 'double': 1.25, 'triple': 1.10},
    ('N', 'O'): {'single': 1.40, 'double': 1.20},
    ('N', 'H'): {'single': 1.01},
    ('O', 'O'): {'single': 1.48, 'double': 1.21},
    ('O', 'H'): {'single': 0.96},
    ('H', 'H'): {'single': 0.74},
}


@dataclass
class BondParameters:
    radii: Dict[str, float] = field(default_factory=lambda: dict(COVALENT_RADII))
    default_radius: float = DEFAULT_RADIUS
    tolerance_factor: float = TOLERANCE_FACTOR
    tolerance_offset: float = TOLERANCE_OFFSET
    bond_lengths: Dict[tuple, Dict[str, float]] = field(default_factory=lambda: copy.deepcopy(BOND_LENGTHS))

    def radius(self, element):
        return self.radii.get(normalize_element(element), self.default_radius)

    def reference(self, el1, el2) -> Optional[Dict[str, float]]:
        e1, e2 = normalize_element(el1), normalize_element(el2)
        ref = self.bond_lengths.get((e1, e2))
        if ref is None:
            ref = self.bond_lengths.get((e2, e1))
        return ref


DEFAULT_PARAMETERS = BondParameters()


def _parse_pair(key):
    # "C-N" -> ('C', 'N')
    parts = key.split("-")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise BondParameterError(f"Bond length key must look like 'C-N', got {key!r}")
    return normalize_element(parts[0]), normalize_element(parts[1])


def _as_float(value, what):
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise BondParameterError(f"{what} must be a number, got {value!r}") from e


def parameters_from_dict(overrides, base=None):
    """
    Overlay a settings dict on the defaults.

        {
          "radii": {"Pt": 1.36},
          "default_radius": 1.4,
          "tolerance_factor": 1.2,
          "tolerance_offset": 0.1,
          "bond_lengths": {"C-P": {"single": 1.84}}
        }
    """
    if not isinstance(overrides, dict):
        raise BondParameterError("Bond parameter settings must be a JSON object")
    params = copy.deepcopy(base or DEFAULT_PARAMETERS)

    for el, r in overrides.get("radii", {}).items():
        params.radii[normalize_element(el)] = _as_float(r, f"radius of {el}")
    if "default_radius" in overrides:
        params.default_radius = _as_float(overrides["default_radius"], "default_radius")
    if "tolerance_factor" in overrides:
        params.tolerance_factor = _as_float(overrides["tolerance_factor"], "tolerance_factor")
    if "tolerance_offset" in overrides:
        params.tolerance_offset = _as_float(overrides["tolerance_offset"], "tolerance_offset")

    for key, lengths in overrides.get("bond_lengths", {}).items():
        pair = _parse_pair(key)
        if not isinstance(lengths, dict) or "single" not in lengths:
            raise BondParameterError(f"Bond lengths for {key} need at least a 'single' entry")
        ref = {}
        for kind in ("single", "double", "triple"):
            if kind in lengths:
                ref[kind] = _as_float(lengths[kind], f"{kind} length of {key}")
        # Replace both orders so the new entry is the one found
        params.bond_lengths.pop((pair[1], pair[0]), None)
        params.bond_lengths[pair] = ref
    return params


def load_bond_parameters(path):
    """Read a JSON overlay file (same layout as parameters_from_dict)."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings_data = json.load(f)
    except OSError as e:
        raise BondParameterError(f"Could not read bond parameter file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise BondParameterError(f"Invalid JSON in {path}: {e}") from e
    return parameters_from_dict(settings_data)
