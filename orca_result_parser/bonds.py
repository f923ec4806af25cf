import numpy as np

from .elements import DEFAULT_PARAMETERS
from .logger import Logger
from .models import Bond

logger = Logger.get_logger("bonds")


def connectivity_limit(el1, el2, parameters=None):
    params = parameters or DEFAULT_PARAMETERS
    return (params.radius(el1) + params.radius(el2)) * params.tolerance_factor + params.tolerance_offset


def is_bonded(el1, el2, distance, parameters=None):
    return distance <= connectivity_limit(el1, el2, parameters)


def classify_bond(el1, el2, distance, parameters=None):
    """
    Bond order from the distance alone: 3, 2 or 1.
    Thresholds sit halfway between neighbouring reference lengths, so the
    result does not depend on the order of the two elements.
    """
    params = parameters or DEFAULT_PARAMETERS
    ref = params.reference(el1, el2)
    if ref is None:
        return 1

    single = ref.get('single')
    double = ref.get('double')
    triple = ref.get('triple')

    if triple is not None:
        limit = (double + triple) / 2 if double is not None else triple + 0.1
        if distance <= limit:
            return 3
    if double is not None and single is not None and distance <= (single + double) / 2:
        return 2
    return 1


def distance_matrix(atoms):
    coords = np.array([[a.x, a.y, a.z] for a in atoms], dtype=float).reshape(-1, 3)
    diff = coords[:, None, :] - coords[None, :, :]
    return np.sqrt((diff ** 2).sum(axis=-1))


def infer_bonds(atoms, parameters=None):
    """All bonded pairs of the atom set, source < target, typed by classify_bond."""
    if len(atoms) < 2:
        return []
    dist = distance_matrix(atoms)
    bonds = []
    for i in range(len(atoms)):
        for j in range(i + 1, len(atoms)):
            d = float(dist[i, j])
            a1, a2 = atoms[i], atoms[j]
            if not is_bonded(a1.element, a2.element, d, parameters):
                continue
            bonds.append(Bond(source=i, target=j, order=classify_bond(a1.element, a2.element, d, parameters)))
    logger.debug(f"{len(bonds)} bonds between {len(atoms)} atoms")
    return bonds
