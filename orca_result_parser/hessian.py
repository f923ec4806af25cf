import numpy as np

from .logger import Logger
from .models import Atom, OrcaData
from .utils import to_float

logger = Logger.get_logger("hessian")

BOHR_TO_ANGSTROM = 0.529177210903

# Blocks whose first line is a row count (or "rows cols" for the mode matrix)
COUNTED_BLOCKS = ("ir_spectrum", "vibrational_frequencies", "atoms", "normal_modes")


def _is_int_row(parts):
    return bool(parts) and all(p.lstrip("-").isdigit() for p in parts)


class HessianParser:
    """
    Reader for ORCA .hess companion files.

    The file is a sequence of "$name" tagged blocks closed by the next tag or
    by "$end". Only the blocks describing vibrations are read:

        $ir_spectrum             frequency / intensity list
        $vibrational_frequencies frequency list (fallback when no IR block)
        $normal_modes            column-blocked displacement matrix
        $atoms                   geometry in Bohr
    """
    def __init__(self):
        self._reset()

    def _reset(self):
        self.filename = ""
        self.lines = []
        self.data = OrcaData(from_hessian=True)
        self.block = None
        self._expect_count = False
        self.ir_rows = []
        self.freq_rows = []
        self.atom_rows = []
        self.mode_cols = []
        self.mode_values = {}  # (coordinate row, mode column) -> value
        self.mode_dims = None

    def load_from_memory(self, content, filename=""):
        self._reset()
        self.filename = filename
        self.lines = content.splitlines()
        self.data.source_files = [filename] if filename else []
        self.parse_all()
        return self.data

    def parse_all(self):
        for raw in self.lines:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("$"):
                self.close_block()
                name = line.split()[0][1:]
                if name != "end":
                    self.block = name
                    self._expect_count = name in COUNTED_BLOCKS
                continue
            if self.block is None:
                continue

            parts = line.split()
            if self._expect_count:
                self._expect_count = False
                if self.block == "normal_modes":
                    # "69 69" dimension line, absent in some hand-edited files
                    if len(parts) == 2 and _is_int_row(parts):
                        self.mode_dims = (int(parts[0]), int(parts[1]))
                        continue
                elif len(parts) == 1 and _is_int_row(parts):
                    continue

            reader = {
                "ir_spectrum": self.read_ir_row,
                "vibrational_frequencies": self.read_frequency_row,
                "normal_modes": self.read_mode_row,
                "atoms": self.read_atom_row,
            }.get(self.block)
            if reader is not None:
                reader(parts)

        self.close_block()
        self.build_record()
        return self.data

    def close_block(self):
        if self.block == "normal_modes":
            self.data.normal_modes = self.build_normal_modes()
        self.block = None
        self._expect_count = False

    # --- Block rows ---

    def read_ir_row(self, parts):
        # ORCA >= 5:  wavenumber  eps  Int  TX  TY  TZ
        # ORCA 4:     wavenumber  T**2  TX  TY  TZ
        if len(parts) < 2:
            return
        freq = to_float(parts[0])
        if freq is None:
            return
        intensity_col = 2 if len(parts) >= 6 else 1
        intensity = to_float(parts[intensity_col], 0.0)
        self.ir_rows.append((freq, intensity))

    def read_frequency_row(self, parts):
        #    6     1639.940000
        if len(parts) < 2:
            return
        freq = to_float(parts[1])
        if freq is not None:
            self.freq_rows.append(freq)

    def read_atom_row(self, parts):
        #  O     15.99900      0.000000    0.000000   -0.129038
        if len(parts) < 5:
            return
        try:
            x, y, z = (float(v) * BOHR_TO_ANGSTROM for v in parts[2:5])
        except ValueError:
            return
        self.atom_rows.append(Atom(index=len(self.atom_rows), element=parts[0], x=x, y=y, z=z))

    def read_mode_row(self, parts):
        # Header lines name the matrix columns the following rows fill:
        #                  0          1          2          3          4          5
        #       0       0.000000   0.000000   0.000000   0.000000   0.000000   0.000000
        if _is_int_row(parts):
            self.mode_cols = [int(p) for p in parts]
            return
        if len(parts) < 2:
            return
        try:
            row = int(parts[0])
        except ValueError:
            return
        for k, val_str in enumerate(parts[1:]):
            if k >= len(self.mode_cols):
                break
            val = to_float(val_str)
            if val is not None:
                self.mode_values[(row, self.mode_cols[k])] = val

    # --- Assembly ---

    def build_normal_modes(self):
        """Reshape the coordinate-major matrix into per-atom (x, y, z) vectors per mode."""
        if not self.mode_values:
            return []
        if self.mode_dims is not None:
            n_rows, n_cols = self.mode_dims
        else:
            n_rows = max(r for r, _ in self.mode_values) + 1
            n_cols = max(c for _, c in self.mode_values) + 1

        matrix = np.zeros((n_rows, n_cols))
        for (r, c), val in self.mode_values.items():
            if r < n_rows and c < n_cols:
                matrix[r, c] = val

        n_atoms = n_rows // 3
        modes = []
        for m in range(n_cols):
            per_atom = matrix[:n_atoms * 3, m].reshape(n_atoms, 3)
            modes.append([tuple(vec) for vec in per_atom.tolist()])
        logger.debug(f"Normal mode matrix {n_rows}x{n_cols}: {n_atoms} atoms")
        return modes

    def build_record(self):
        if self.ir_rows:
            for freq, intensity in self.ir_rows:
                self.data.add_frequency(freq, intensity)
        else:
            for freq in self.freq_rows:
                self.data.add_frequency(freq, 0.0)

        if self.atom_rows:
            self.data.atoms = list(self.atom_rows)
            self.data.hessian_atoms = True
