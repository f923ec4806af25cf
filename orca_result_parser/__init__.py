PACKAGE_NAME = "ORCA Result Parser"
__version__ = "1.0.0"
PACKAGE_DESCRIPTION = "Parser for ORCA output (.out, .log), Hessian (.hess) and trajectory (.xyz) files. Recovers geometries, vibrations, thermochemistry, charges, NMR, orbitals, excitations and a bond graph."

from .bonds import classify_bond, infer_bonds, is_bonded
from .classifier import FileKind, classify
from .elements import BondParameters, load_bond_parameters
from .exceptions import BondParameterError, OrcaParserError, OrcaReadError
from .hessian import HessianParser
from .models import OrcaData
from .parser import OrcaParser
from .session import parse_contents, parse_file_content, parse_files

__all__ = [
    "BondParameterError",
    "BondParameters",
    "FileKind",
    "HessianParser",
    "OrcaData",
    "OrcaParser",
    "OrcaParserError",
    "OrcaReadError",
    "classify",
    "classify_bond",
    "infer_bonds",
    "is_bonded",
    "load_bond_parameters",
    "parse_contents",
    "parse_file_content",
    "parse_files",
]
