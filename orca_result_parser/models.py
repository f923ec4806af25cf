import math
from dataclasses import asdict, dataclass, field, fields
from typing import List, Optional, Tuple

# Two companion-file frequencies closer than this (cm**-1) describe the same mode
FREQUENCY_TOLERANCE = 0.1

# Reported when a file prints thermochemistry without a Temperature line
DEFAULT_TEMPERATURE = 298.15

Vector = Tuple[float, float, float]


@dataclass
class Atom:
    index: int
    element: str
    x: float  # Angstrom
    y: float
    z: float

    @property
    def position(self) -> Vector:
        return (self.x, self.y, self.z)


@dataclass
class Bond:
    source: int
    target: int
    order: int = 1


@dataclass
class GeometryStep:
    cycle: int
    energy: float = 0.0  # Eh
    gradient: float = 0.0
    coordinates: List[Atom] = field(default_factory=list)


@dataclass
class GeometryConvergenceData:
    cycle: int
    energy_change: Optional[float] = None
    rms_gradient: Optional[float] = None
    max_gradient: Optional[float] = None
    rms_step: Optional[float] = None
    max_step: Optional[float] = None
    energy: Optional[float] = None


@dataclass
class Vibration:
    mode: int
    frequency: float  # cm**-1
    intensity: float = 0.0  # km/mol
    vectors: List[Vector] = field(default_factory=list)


@dataclass
class ThermoChemistry:
    temperature: Optional[float] = None  # K, only when printed
    enthalpy: Optional[float] = None
    entropy: Optional[float] = None
    gibbs_free_energy: Optional[float] = None
    zpe: Optional[float] = None
    electronic_energy: Optional[float] = None
    thermal_energy: Optional[float] = None


@dataclass
class AtomicCharge:
    atom_index: int
    element: str
    charge: float


@dataclass
class SpinDensity:
    atom_index: int
    element: str
    spin: float


@dataclass
class NMRShielding:
    atom_index: int
    element: str
    isotropic: float
    anisotropy: float = 0.0


@dataclass
class MolecularOrbital:
    no: int
    occupancy: float
    energy_eh: float
    energy_ev: float


@dataclass
class Excitation:
    state: int
    energy_cm: float
    wavelength: float  # nm
    oscillator_strength: float


@dataclass
class ScfIteration:
    iteration: int
    energy: float


@dataclass
class DipoleMoment:
    x: float
    y: float
    z: float
    magnitude: float

    @classmethod
    def from_components(cls, x, y, z):
        return cls(x, y, z, math.sqrt(x * x + y * y + z * z))


def _merge_by_atom(current, incoming):
    """Later entries replace the same atom index, unseen indices are appended."""
    if not incoming:
        return current
    merged = list(current)
    position = {item.atom_index: k for k, item in enumerate(merged)}
    for item in incoming:
        if item.atom_index in position:
            merged[position[item.atom_index]] = item
        else:
            position[item.atom_index] = len(merged)
            merged.append(item)
    return merged


@dataclass
class OrcaData:
    """
    Everything recovered from one or more ORCA files.
    A reader fills a fresh instance per file; the session folds those into one
    aggregate with merge().
    """
    atoms: List[Atom] = field(default_factory=list)
    bonds: List[Bond] = field(default_factory=list)
    trajectory: List[GeometryStep] = field(default_factory=list)
    geometry_convergence: List[GeometryConvergenceData] = field(default_factory=list)
    vibrations: List[Vibration] = field(default_factory=list)
    thermo: Optional[ThermoChemistry] = None
    mulliken_charges: List[AtomicCharge] = field(default_factory=list)
    loewdin_charges: List[AtomicCharge] = field(default_factory=list)
    mulliken_spin_densities: List[SpinDensity] = field(default_factory=list)
    loewdin_spin_densities: List[SpinDensity] = field(default_factory=list)
    nmr_shielding: List[NMRShielding] = field(default_factory=list)
    scf_convergence: List[ScfIteration] = field(default_factory=list)
    dipole_moment: Optional[DipoleMoment] = None
    orbitals: List[MolecularOrbital] = field(default_factory=list)
    excitations: List[Excitation] = field(default_factory=list)

    final_energy: Optional[float] = None
    charge: Optional[int] = None
    multiplicity: Optional[int] = None
    version: Optional[str] = None
    terminated_normally: Optional[bool] = None
    source_files: List[str] = field(default_factory=list)

    # Reader-side only: hessian files carry mode columns that are attached
    # positionally at merge time, and an energy seen before the first
    # coordinate block of a file belongs to the previous file's last step.
    normal_modes: List[List[Vector]] = field(default_factory=list, repr=False)
    hessian_atoms: bool = field(default=False, repr=False)
    from_hessian: bool = field(default=False, repr=False)
    leading_energy: Optional[float] = field(default=None, repr=False)

    # --- Orbitals ---

    def homo(self):
        occupied = [mo for mo in self.orbitals if mo.occupancy > 0]
        if not occupied:
            return None
        return max(occupied, key=lambda mo: mo.no)

    def lumo(self):
        homo = self.homo()
        if homo is None:
            return None
        for mo in self.orbitals:
            if mo.no == homo.no + 1:
                return mo
        return None

    def homo_lumo_gap(self):
        """HOMO-LUMO gap in eV, or None when either orbital is missing."""
        homo, lumo = self.homo(), self.lumo()
        if homo is None or lumo is None:
            return None
        return lumo.energy_ev - homo.energy_ev

    # --- Vibrations ---

    def upsert_vibration(self, mode, frequency, intensity):
        """IR table rows are keyed by mode number."""
        for vib in self.vibrations:
            if vib.mode == mode:
                vib.frequency = frequency
                vib.intensity = intensity
                return vib
        vib = Vibration(mode=mode, frequency=frequency, intensity=intensity)
        self.vibrations.append(vib)
        return vib

    def add_frequency(self, frequency, intensity):
        """
        Companion-file frequencies carry no trustworthy mode number, so they
        are matched by value. An existing record within the tolerance wins and
        keeps its intensity.
        """
        for vib in self.vibrations:
            if abs(vib.frequency - frequency) < FREQUENCY_TOLERANCE:
                return vib
        # Next free number; output files already hold modes 6..3N-1
        mode = max((v.mode for v in self.vibrations), default=-1) + 1
        vib = Vibration(mode=mode, frequency=frequency, intensity=intensity)
        self.vibrations.append(vib)
        return vib

    def attach_normal_modes(self, modes):
        # Positional: the m-th matrix column goes to the m-th vibration record.
        # Nothing guarantees this matches mode numbers of the output file.
        for m, vectors in enumerate(modes):
            if m >= len(self.vibrations):
                break
            self.vibrations[m].vectors = list(vectors)

    # --- Merge ---

    def merge(self, partial):
        """Fold the record of one more file into this aggregate."""
        if partial.atoms and (not partial.hessian_atoms or not self.atoms):
            self.atoms = list(partial.atoms)

        if partial.leading_energy is not None and self.trajectory:
            self.trajectory[-1].energy = partial.leading_energy
        for step in partial.trajectory:
            step.cycle = len(self.trajectory)
            self.trajectory.append(step)

        for conv in partial.geometry_convergence:
            conv.cycle = len(self.geometry_convergence) + 1
            self.geometry_convergence.append(conv)
        for it in partial.scf_convergence:
            it.iteration = len(self.scf_convergence) + 1
            self.scf_convergence.append(it)

        if partial.from_hessian:
            for vib in partial.vibrations:
                self.add_frequency(vib.frequency, vib.intensity)
            self.attach_normal_modes(partial.normal_modes)
        else:
            for vib in partial.vibrations:
                merged = self.upsert_vibration(vib.mode, vib.frequency, vib.intensity)
                if vib.vectors:
                    merged.vectors = list(vib.vectors)

        if partial.thermo is not None:
            if self.thermo is None:
                self.thermo = ThermoChemistry()
            for f in fields(ThermoChemistry):
                value = getattr(partial.thermo, f.name)
                if value is not None:
                    setattr(self.thermo, f.name, value)

        self.mulliken_charges = _merge_by_atom(self.mulliken_charges, partial.mulliken_charges)
        self.loewdin_charges = _merge_by_atom(self.loewdin_charges, partial.loewdin_charges)
        self.mulliken_spin_densities = _merge_by_atom(self.mulliken_spin_densities, partial.mulliken_spin_densities)
        self.loewdin_spin_densities = _merge_by_atom(self.loewdin_spin_densities, partial.loewdin_spin_densities)
        self.nmr_shielding = _merge_by_atom(self.nmr_shielding, partial.nmr_shielding)

        if partial.orbitals:
            self.orbitals = list(partial.orbitals)
        if partial.excitations:
            self.excitations = list(partial.excitations)

        for name in ("dipole_moment", "final_energy", "charge", "multiplicity", "version", "terminated_normally"):
            value = getattr(partial, name)
            if value is not None:
                setattr(self, name, value)

        self.source_files.extend(partial.source_files)
        return self

    def to_dict(self):
        data = asdict(self)
        for key in ("normal_modes", "hessian_atoms", "from_hessian", "leading_energy"):
            data.pop(key, None)
        return data
