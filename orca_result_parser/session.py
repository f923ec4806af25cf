from .bonds import infer_bonds
from .classifier import FileKind, classify
from .hessian import HessianParser
from .logger import Logger
from .models import OrcaData
from .parser import OrcaParser
from .utils import read_text

logger = Logger.get_logger("session")


def parse_file_content(filename, content):
    """Route one file to its reader. Returns a per-file OrcaData, not yet merged."""
    kind = classify(filename, content)
    logger.info(f"Reading {filename or '<memory>'} as {kind.value}")
    if kind == FileKind.HESSIAN_BLOCK:
        return HessianParser().load_from_memory(content, filename)
    if kind == FileKind.XYZ:
        return OrcaParser().parse_xyz_content(content, filename)
    return OrcaParser().load_from_memory(content, filename)


def parse_contents(named_contents, bond_parameters=None):
    """
    Build one record from already loaded (filename, text) pairs.
    Order matters: later files win for single values and extend trajectories.
    """
    aggregate = OrcaData()
    for filename, content in named_contents:
        aggregate.merge(parse_file_content(filename, content))

    if aggregate.atoms:
        aggregate.bonds = infer_bonds(aggregate.atoms, bond_parameters)
    logger.info(
        f"{len(aggregate.atoms)} atoms, {len(aggregate.bonds)} bonds, "
        f"{len(aggregate.trajectory)} geometry steps, {len(aggregate.vibrations)} vibrations"
    )
    return aggregate


def parse_files(paths, bond_parameters=None):
    """
    Read and parse a set of files. Every file is read before any parsing so an
    unreadable input fails the whole call (OrcaReadError) without a partial record.
    """
    named_contents = [(str(path), read_text(path)) for path in paths]
    return parse_contents(named_contents, bond_parameters)
