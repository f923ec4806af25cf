"""Command line entry point: parse ORCA files and print a summary or JSON."""
import argparse
import json
import logging
import sys

from .elements import load_bond_parameters
from .exceptions import OrcaParserError
from .logger import Logger
from .models import DEFAULT_TEMPERATURE
from .session import parse_files

logger = Logger.get_logger("cli")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="orca-result-parser",
        description="Read ORCA output (.out/.log), Hessian (.hess) and trajectory (.xyz) files.",
    )
    parser.add_argument("files", nargs="+", help="Input files, merged in the given order")
    parser.add_argument(
        "--json",
        metavar="PATH",
        default=None,
        help="Write the full record as JSON to PATH ('-' for stdout)",
    )
    parser.add_argument(
        "--bond-table",
        metavar="PATH",
        default=None,
        help="JSON file overriding covalent radii and reference bond lengths",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        default=None,
        help="Also write log messages to PATH",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def format_summary(data):
    lines = []
    if data.source_files:
        lines.append("Files: " + ", ".join(data.source_files))
    if data.version:
        lines.append(f"ORCA version: {data.version}")
    lines.append(f"Atoms: {len(data.atoms)}   Bonds: {len(data.bonds)}")
    if data.final_energy is not None:
        lines.append(f"Final single point energy: {data.final_energy:.8f} Eh")
    if data.trajectory:
        lines.append(f"Geometry steps: {len(data.trajectory)}")
    if data.vibrations:
        n_imag = sum(1 for v in data.vibrations if v.frequency < 0)
        lines.append(f"Vibrations: {len(data.vibrations)} ({n_imag} imaginary)")

    homo, lumo = data.homo(), data.lumo()
    if homo is not None:
        lines.append(f"HOMO: #{homo.no} {homo.energy_ev:.4f} eV")
    if lumo is not None:
        lines.append(f"LUMO: #{lumo.no} {lumo.energy_ev:.4f} eV")
    gap = data.homo_lumo_gap()
    if gap is not None:
        lines.append(f"HOMO-LUMO gap: {gap:.4f} eV")

    if data.thermo is not None:
        t = data.thermo
        temperature = t.temperature if t.temperature is not None else DEFAULT_TEMPERATURE
        lines.append(f"Thermochemistry at {temperature:.2f} K:")
        for label, value in (
            ("Zero point energy", t.zpe),
            ("Total enthalpy", t.enthalpy),
            ("Entropy correction", t.entropy),
            ("Gibbs free energy", t.gibbs_free_energy),
        ):
            if value is not None:
                lines.append(f"  {label}: {value:.8f} Eh")

    if data.dipole_moment is not None:
        lines.append(f"Dipole moment: {data.dipole_moment.magnitude:.5f} a.u.")
    if data.excitations:
        lines.append(f"Excited states: {len(data.excitations)}")
    if data.nmr_shielding:
        lines.append(f"NMR shieldings: {len(data.nmr_shielding)}")
    return "\n".join(lines)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Handler and level are process-wide, so both are undone before returning
    previous_level = Logger.get_logger().level
    file_handler = Logger.add_file_handler(args.log_file) if args.log_file else None
    Logger.set_level(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        return _run(args)
    finally:
        Logger.set_level(previous_level)
        if file_handler is not None:
            Logger.remove_handler(file_handler)


def _run(args):
    try:
        bond_parameters = load_bond_parameters(args.bond_table) if args.bond_table else None
        data = parse_files(args.files, bond_parameters)
    except OrcaParserError as e:
        logger.error(str(e))
        return 1

    if args.json:
        payload = json.dumps(data.to_dict(), indent=2)
        if args.json == "-":
            print(payload)
        else:
            with open(args.json, 'w', encoding='utf-8') as f:
                f.write(payload)
    else:
        print(format_summary(data))
    return 0


if __name__ == "__main__":
    sys.exit(main())
