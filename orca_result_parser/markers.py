"""
Marker vocabulary of ORCA output files.

Every function here is a pure predicate (or extractor) over one trimmed line.
The scanner in parser.py only asks these questions, so the vocabulary can be
adjusted for a new ORCA release without touching the state machine.
Matching is case-sensitive, ORCA prints its headers verbatim.
"""
import re
from enum import Enum


class Section(Enum):
    IDLE = "idle"
    COORDINATES = "coordinates"
    IR_TABLE = "ir_table"
    MULLIKEN_CHARGES = "mulliken_charges"
    LOEWDIN_CHARGES = "loewdin_charges"
    MULLIKEN_SPIN = "mulliken_spin"
    LOEWDIN_SPIN = "loewdin_spin"
    NMR = "nmr"
    ABSORPTION = "absorption"
    ORBITALS = "orbitals"
    GEOMETRY_CONVERGENCE = "geometry_convergence"


# A marker re-appearing while its own table is still being read continues the
# table instead of clearing it.
RESUMABLE_SECTIONS = frozenset({
    Section.MULLIKEN_CHARGES,
    Section.LOEWDIN_CHARGES,
    Section.NMR,
})

COORDINATES_MARKER = "CARTESIAN COORDINATES (ANGSTROEM)"
IR_TABLE_RE = re.compile(r"^\s*Mode\s+freq\s+eps\s+Int")

# Checked in order, first hit wins. The spin density markers must come before
# anything that could be a prefix of them.
_ENTRY_MARKERS = (
    (Section.COORDINATES, lambda line: COORDINATES_MARKER in line),
    (Section.IR_TABLE, lambda line: IR_TABLE_RE.match(line) is not None),
    (Section.MULLIKEN_SPIN, lambda line: "MULLIKEN ATOMIC SPIN DENSITIES" in line),
    (Section.LOEWDIN_SPIN, lambda line: "LOEWDIN ATOMIC SPIN DENSITIES" in line),
    (Section.MULLIKEN_CHARGES, lambda line: "MULLIKEN ATOMIC CHARGES" in line),
    (Section.LOEWDIN_CHARGES, lambda line: "LOEWDIN ATOMIC CHARGES" in line),
    (Section.NMR, lambda line: "CHEMICAL SHIELDING SUMMARY" in line),
    (Section.ABSORPTION, lambda line: "ABSORPTION SPECTRUM VIA TRANSITION ELECTRIC DIPOLE MOMENTS" in line),
    (Section.ORBITALS, lambda line: "ORBITAL ENERGIES" in line),
    (Section.GEOMETRY_CONVERGENCE, lambda line: "Geometry convergence" in line),
)


def section_entry(line):
    """Section opened by this line, or None."""
    for section, predicate in _ENTRY_MARKERS:
        if predicate(line):
            return section
    return None


def is_blank(line):
    return line == ""


def is_separator(line):
    return line.startswith("------")


def is_table_end(line):
    return is_blank(line) or is_separator(line)


def ends_coordinates(line):
    # The Bohr copy of the geometry and the Z-matrix follow the Angstrom block
    return is_blank(line) or "CARTESIAN COORDINATES (A.U.)" in line or "INTERNAL COORDINATES" in line


COORD_LINE_RE = re.compile(r"^\s*([A-Za-z]+)\s+([-\d.]+)\s+([-\d.]+)\s+([-\d.]+)")


def match_coordinate(line):
    """'C  0.0 0.0 1.2' -> ('C', 0.0, 0.0, 1.2), None otherwise"""
    m = COORD_LINE_RE.match(line)
    if not m:
        return None
    try:
        return m.group(1), float(m.group(2)), float(m.group(3)), float(m.group(4))
    except ValueError:
        return None


def is_charges_sum(line):
    return "Sum of atomic charges" in line


def is_spin_sum(line):
    return "Sum of atomic spin densities" in line


ORBITAL_HEADER_RE = re.compile(r"NO\s+OCC\s+E\(Eh\)\s+E\(eV\)")


def is_orbital_header(line):
    return ORBITAL_HEADER_RE.search(line) is not None


def is_convergence_flush(line):
    return "----------------" in line


# Label substring -> GeometryConvergenceData attribute
CONVERGENCE_METRICS = (
    ("Energy change", "energy_change"),
    ("RMS gradient", "rms_gradient"),
    ("MAX gradient", "max_gradient"),
    ("RMS step", "rms_step"),
    ("MAX step", "max_step"),
)


# --- Single value markers, independent of the section state ---

FINAL_ENERGY_MARKER = "FINAL SINGLE POINT ENERGY"
DIPOLE_RE = re.compile(r"Total Dipole Moment\s+:\s+([-\d.]+)\s+([-\d.]+)\s+([-\d.]+)")

# Regex -> ThermoChemistry attribute
THERMO_PATTERNS = (
    (re.compile(r"Total Enthalpy\s+\.\.\.\s+([-\d.]+)\s+Eh"), "enthalpy"),
    (re.compile(r"Total entropy correction\s+\.\.\.\s+([-\d.]+)\s+Eh"), "entropy"),
    (re.compile(r"Final Gibbs free energy\s+\.\.\.\s+([-\d.]+)\s+Eh"), "gibbs_free_energy"),
    (re.compile(r"Zero point energy\s+\.\.\.\s+([-\d.]+)\s+Eh"), "zpe"),
    (re.compile(r"Temperature\s+\.\.\.\s+([-\d.]+)\s+K"), "temperature"),
    (re.compile(r"Electronic energy\s+\.\.\.\s+([-\d.]+)\s+Eh"), "electronic_energy"),
    (re.compile(r"Total thermal energy\s+([-\d.]+)\s+Eh"), "thermal_energy"),
)


def is_scf_total_energy(line):
    return line.startswith("Total Energy") and "Eh" in line


def is_normal_termination(line):
    return "****ORCA TERMINATED NORMALLY****" in line


def is_version(line):
    return line.startswith("Program Version")


def is_total_charge(line):
    return line.startswith("Total Charge")


def is_multiplicity(line):
    return line.startswith("Multiplicity")
