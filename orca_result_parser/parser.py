from . import markers
from .logger import Logger
from .markers import Section
from .models import (
    Atom,
    AtomicCharge,
    DipoleMoment,
    Excitation,
    GeometryConvergenceData,
    GeometryStep,
    MolecularOrbital,
    NMRShielding,
    OrcaData,
    ScfIteration,
    SpinDensity,
    ThermoChemistry,
)
from .utils import last_float, leading_int, to_float

logger = Logger.get_logger("parser")

# Section -> OrcaData list attribute that the section fills
SECTION_COLLECTIONS = {
    Section.IR_TABLE: "vibrations",
    Section.MULLIKEN_CHARGES: "mulliken_charges",
    Section.LOEWDIN_CHARGES: "loewdin_charges",
    Section.MULLIKEN_SPIN: "mulliken_spin_densities",
    Section.LOEWDIN_SPIN: "loewdin_spin_densities",
    Section.NMR: "nmr_shielding",
    Section.ABSORPTION: "excitations",
    Section.ORBITALS: "orbitals",
}


class OrcaParser:
    """Parser for ORCA quantum chemistry output files"""
    def __init__(self):
        self.filename = ""
        self.lines = []
        self.data = OrcaData()
        self.section = Section.IDLE
        self._rows_in_section = 0
        self._orbital_header_seen = False
        self._temp_atoms = []
        self._current_conv = None
        self._combined_spin_started = False
        self._row_handlers = {
            Section.IR_TABLE: self.read_ir_row,
            Section.MULLIKEN_CHARGES: lambda line: self.read_charge_row(line, "mulliken"),
            Section.LOEWDIN_CHARGES: lambda line: self.read_charge_row(line, "loewdin"),
            Section.MULLIKEN_SPIN: lambda line: self.read_spin_row(line, "mulliken"),
            Section.LOEWDIN_SPIN: lambda line: self.read_spin_row(line, "loewdin"),
            Section.NMR: self.read_nmr_row,
            Section.ABSORPTION: self.read_absorption_row,
            Section.ORBITALS: self.read_orbital_row,
            Section.GEOMETRY_CONVERGENCE: self.read_convergence_line,
        }

    def load_from_memory(self, content, filename=""):
        self.filename = filename
        self.lines = content.splitlines()
        self.data = OrcaData(source_files=[filename] if filename else [])
        self.section = Section.IDLE
        self._temp_atoms = []
        self._current_conv = None
        self.parse_all()
        return self.data

    def parse_all(self):
        for raw in self.lines:
            self.scan_line(raw.strip())
        self.finish()
        logger.debug(
            f"{self.filename or '<memory>'}: {len(self.data.trajectory)} geometry steps, "
            f"{len(self.data.vibrations)} vibrations, {len(self.data.orbitals)} orbitals"
        )

    def scan_line(self, line):
        # 1. Coordinates end on their own terminators before anything else looks at the line
        if self.section == Section.COORDINATES:
            if markers.ends_coordinates(line):
                self.close_section()
            elif not markers.is_separator(line) and markers.section_entry(line) is None:
                self.read_coordinate(line)
                return

        # 2. Markers that are not tied to any section
        self.apply_single_value_markers(line)

        # 3. Section transitions
        entered = markers.section_entry(line)
        if entered is not None:
            self.enter_section(entered)
            return

        # 4. Rows of the active section
        handler = self._row_handlers.get(self.section)
        if handler is not None:
            handler(line)

    def finish(self):
        """End of text closes whatever is still open."""
        if self.section != Section.IDLE:
            self.close_section()

    # --- Transitions ---

    def enter_section(self, section):
        resumed = section == self.section and section in markers.RESUMABLE_SECTIONS
        if self.section != Section.IDLE and not resumed:
            self.close_section()
        logger.debug(f"Entering {section.value} section")

        if section == Section.COORDINATES:
            self._temp_atoms = []
        elif section == Section.GEOMETRY_CONVERGENCE:
            self._current_conv = GeometryConvergenceData(cycle=len(self.data.geometry_convergence) + 1)
        elif section == Section.ORBITALS:
            self._orbital_header_seen = False
        elif section in (Section.MULLIKEN_CHARGES, Section.LOEWDIN_CHARGES) and not resumed:
            self._combined_spin_started = False

        if section in SECTION_COLLECTIONS and not resumed:
            # A fresh table replaces whatever an earlier one left behind
            setattr(self.data, SECTION_COLLECTIONS[section], [])
        if not resumed:
            self._rows_in_section = 0
        self.section = section

    def close_section(self):
        if self.section == Section.COORDINATES:
            self.commit_coordinates()
        elif self.section == Section.GEOMETRY_CONVERGENCE and self._current_conv is not None:
            logger.debug("Dropping incomplete geometry convergence block")
        self._current_conv = None
        self.section = Section.IDLE
        self._rows_in_section = 0

    def _end_table_or_skip(self, line):
        """Blank/dashed lines are header decoration until the first row, then the end."""
        if markers.is_table_end(line):
            if self._rows_in_section > 0:
                self.close_section()
            return True
        return False

    # --- Geometry ---

    def read_coordinate(self, line):
        parsed = markers.match_coordinate(line)
        if parsed is None:
            return
        element, x, y, z = parsed
        self._temp_atoms.append(Atom(index=len(self._temp_atoms), element=element, x=x, y=y, z=z))

    def commit_coordinates(self):
        if not self._temp_atoms:
            return
        atoms = self._temp_atoms
        self._temp_atoms = []
        self.data.atoms = list(atoms)

        trajectory = self.data.trajectory
        last_step = trajectory[-1] if trajectory else None
        if last_step is None or last_step.coordinates:
            trajectory.append(GeometryStep(cycle=len(trajectory), coordinates=list(atoms)))
        else:
            last_step.coordinates = list(atoms)

    def read_convergence_line(self, line):
        conv = self._current_conv
        if conv is None:
            return
        for label, attr in markers.CONVERGENCE_METRICS:
            if label in line:
                # Energy change      -0.0064331427            0.0000050000      NO
                parts = line.split()
                if len(parts) > 2:
                    value = to_float(parts[2])
                    if value is not None:
                        setattr(conv, attr, value)
                return

        if markers.is_convergence_flush(line) and conv.rms_gradient is not None:
            # Block n describes the geometry of trajectory step n
            step_idx = len(self.data.geometry_convergence)
            if step_idx < len(self.data.trajectory):
                step = self.data.trajectory[step_idx]
                conv.energy = step.energy
                step.gradient = conv.rms_gradient or 0.0
            self.data.geometry_convergence.append(conv)
            self._current_conv = None
            self.section = Section.IDLE

    # --- Single value markers ---

    def apply_single_value_markers(self, line):
        if markers.FINAL_ENERGY_MARKER in line:
            energy = to_float(line.split()[-1])
            if energy is not None:
                self.data.final_energy = energy
                # Energies trail their geometry block, so they belong to the last step pushed
                if self.data.trajectory:
                    self.data.trajectory[-1].energy = energy
                else:
                    self.data.leading_energy = energy

        for pattern, attr in markers.THERMO_PATTERNS:
            m = pattern.search(line)
            if m:
                value = to_float(m.group(1))
                if value is None:
                    continue
                if self.data.thermo is None:
                    self.data.thermo = ThermoChemistry()
                setattr(self.data.thermo, attr, value)

        m = markers.DIPOLE_RE.search(line)
        if m:
            try:
                x, y, z = float(m.group(1)), float(m.group(2)), float(m.group(3))
                self.data.dipole_moment = DipoleMoment.from_components(x, y, z)
            except ValueError:
                logger.debug(f"Unreadable dipole line: {line}")

        if markers.is_scf_total_energy(line):
            # Total Energy       :         -76.32363510 Eh           -2076.86108 eV
            for token in line.split():
                if "." in token and ":" not in token:
                    energy = to_float(token)
                    if energy is not None:
                        self.data.scf_convergence.append(
                            ScfIteration(iteration=len(self.data.scf_convergence) + 1, energy=energy))
                        break

        if markers.is_normal_termination(line):
            self.data.terminated_normally = True
        elif markers.is_version(line):
            # Program Version 5.0.4 -  RELEASE  -
            parts = line.split()
            if len(parts) >= 3:
                self.data.version = parts[2]
        elif markers.is_total_charge(line):
            # Total Charge           Charge          ....    0
            try:
                self.data.charge = int(line.split()[-1])
            except ValueError:
                pass
        elif markers.is_multiplicity(line):
            try:
                self.data.multiplicity = int(line.split()[-1])
            except ValueError:
                pass

    # --- Tables ---

    def read_ir_row(self, line):
        if self._end_table_or_skip(line):
            return
        #   6:      1639.94   0.011586   58.55  0.002205  ( 0.000000 -0.046956  0.000000)
        parts = line.replace(":", "", 1).split()
        if len(parts) < 4:
            return
        try:
            mode = int(parts[0])
            freq = float(parts[1])
            intensity = float(parts[3])
        except ValueError:
            return
        self.data.upsert_vibration(mode, freq, intensity)
        self._rows_in_section += 1

    def read_charge_row(self, line, scheme):
        if markers.is_charges_sum(line):
            if self._rows_in_section > 0:
                self.close_section()
            return
        if self._end_table_or_skip(line):
            return
        #    0 C :   -0.123456
        # or, for open shells (CHARGES AND SPIN POPULATIONS):
        #    0 C :   -0.123456    0.456789
        parts = line.split(":")
        if len(parts) != 2:
            return
        left = parts[0].split()
        right = parts[1].split()
        if len(left) < 2 or not right:
            return
        try:
            atom_index = int(left[0])
            charge = float(right[0])
        except ValueError:
            return
        element = left[1]
        getattr(self.data, f"{scheme}_charges").append(AtomicCharge(atom_index, element, charge))
        if len(right) > 1:
            spin = to_float(right[1])
            if spin is not None:
                if not self._combined_spin_started:
                    # Same reset rule as a stand-alone spin density table
                    setattr(self.data, f"{scheme}_spin_densities", [])
                    self._combined_spin_started = True
                getattr(self.data, f"{scheme}_spin_densities").append(SpinDensity(atom_index, element, spin))
        self._rows_in_section += 1

    def read_spin_row(self, line, scheme):
        if markers.is_spin_sum(line):
            if self._rows_in_section > 0:
                self.close_section()
            return
        if self._end_table_or_skip(line):
            return
        # 0 C   0.000000   or   0 C :   0.000000
        parts = line.split()
        if len(parts) < 3:
            return
        spin_idx = 3 if parts[2] == ":" and len(parts) > 3 else 2
        try:
            atom_index = int(parts[0])
            spin = float(parts[spin_idx])
        except ValueError:
            return
        element = parts[1].rstrip(":")
        getattr(self.data, f"{scheme}_spin_densities").append(SpinDensity(atom_index, element, spin))
        self._rows_in_section += 1

    def read_nmr_row(self, line):
        if self._end_table_or_skip(line):
            return
        #   Nucleus  Element    Isotropic     Anisotropy
        #       0       C           50.000         10.000
        parts = line.split()
        if len(parts) < 3:
            return
        try:
            atom_index = int(parts[0])
            isotropic = float(parts[2])
        except ValueError:
            return
        anisotropy = to_float(parts[3], 0.0) if len(parts) > 3 else 0.0
        self.data.nmr_shielding.append(NMRShielding(atom_index, parts[1], isotropic, anisotropy))
        self._rows_in_section += 1

    def read_absorption_row(self, line):
        if self._end_table_or_skip(line):
            return
        parts = line.split()
        excitation = None
        try:
            if "->" in parts and len(parts) >= 7:
                # ORCA 6:  0-1A  ->  1-1A    3.101   25010.2   399.8   0.012345 ...
                state = leading_int(parts[2])
                if state is not None:
                    excitation = Excitation(state, float(parts[4]), float(parts[5]), float(parts[6]))
            elif len(parts) >= 4:
                # ORCA 4/5:  1   25010.2    399.8   0.012345000 ...
                excitation = Excitation(int(parts[0]), float(parts[1]), float(parts[2]), float(parts[3]))
        except ValueError:
            return
        if excitation is None:
            return
        self.data.excitations.append(excitation)
        self._rows_in_section += 1

    def read_orbital_row(self, line):
        if not self._orbital_header_seen:
            # Skip the title and "SPIN UP ORBITALS" lines until the column header
            if markers.is_orbital_header(line):
                self._orbital_header_seen = True
            return
        if markers.is_table_end(line):
            self.close_section()
            return
        #   NO   OCC          E(Eh)            E(eV)
        #    0   2.0000     -18.937474      -515.3150
        parts = line.split()
        if len(parts) < 4:
            return
        try:
            mo = MolecularOrbital(int(parts[0]), float(parts[1]), float(parts[2]), float(parts[3]))
        except ValueError:
            return
        self.data.orbitals.append(mo)
        self._rows_in_section += 1

    # --- XYZ ---

    def parse_xyz_content(self, content, filename=""):
        """Parse multi-frame XYZ content (ORCA *_trj.xyz or plain xyz)."""
        self.filename = filename
        self.data = OrcaData(source_files=[filename] if filename else [])
        lines = content.splitlines()
        i = 0
        n_lines = len(lines)

        while i < n_lines:
            line = lines[i].strip()
            if not line:
                i += 1
                continue

            # Number of atoms
            try:
                natoms = int(line)
            except ValueError:
                i += 1
                continue

            i += 1
            if i >= n_lines:
                break

            # Comment line, ORCA writes "Coordinates from ORCA-job x E -76.323635"
            comment = lines[i].strip()
            energy = last_float(comment)
            i += 1

            atoms = []
            for _ in range(natoms):
                if i >= n_lines:
                    break
                parsed = markers.match_coordinate(lines[i].strip())
                if parsed is not None:
                    element, x, y, z = parsed
                    atoms.append(Atom(index=len(atoms), element=element, x=x, y=y, z=z))
                i += 1

            if not atoms:
                continue
            self.data.trajectory.append(GeometryStep(
                cycle=len(self.data.trajectory),
                energy=energy if energy is not None else 0.0,
                coordinates=atoms,
            ))
            self.data.atoms = list(atoms)

        logger.debug(f"{filename or '<memory>'}: {len(self.data.trajectory)} xyz frames")
        return self.data
