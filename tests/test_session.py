import textwrap

import pytest

from orca_result_parser.exceptions import OrcaReadError
from orca_result_parser.models import AtomicCharge, OrcaData
from orca_result_parser.session import parse_contents, parse_file_content, parse_files


IR_OUTPUT = textwrap.dedent("""\
    ---------------------------------
    CARTESIAN COORDINATES (ANGSTROEM)
    ---------------------------------
      H      0.000000    0.000000    0.000000
      H      0.000000    0.000000    0.740000

    -----------
    IR SPECTRUM
    -----------

     Mode   freq       eps      Int      T**2         TX        TY        TZ
           cm**-1   L/(mol*cm) km/mol    a.u.
    ----------------------------------------------------------------------------
      6:     44.92   0.000000    0.00  0.000000  ( 0.000000  0.000000  0.000000)

""")

SINGLE_MODE_HESS = textwrap.dedent("""\
    $orca_hessian_file

    $normal_modes
    6 1
                      0
          0       0.000000
          1       0.000000
          2       0.700000
          3       0.000000
          4       0.000000
          5      -0.700000

    $atoms
    2
     H      1.00800      0.000000    0.000000    0.000000
     H      1.00800      0.000000    0.000000    2.000000

    $ir_spectrum
    1
         44.95       0.00100000       5.00000000       0.00000000       0.00000000       0.00000000

    $end
""")

NH3_OUTPUT = textwrap.dedent("""\
    ---------------------------------
    CARTESIAN COORDINATES (ANGSTROEM)
    ---------------------------------
      N      0.000000    0.000000    0.116000
      H      0.000000    0.939000   -0.271000
      H      0.813000   -0.470000   -0.271000
      H     -0.813000   -0.470000   -0.271000

     Mode   freq       eps      Int      T**2         TX        TY        TZ
           cm**-1   L/(mol*cm) km/mol    a.u.
    ----------------------------------------------------------------------------
      6:   1066.50   0.030000  150.00  0.008000  ( 0.000000  0.000000  0.090000)
      7:   1680.10   0.002500   12.60  0.000500  ( 0.020000  0.000000  0.000000)
      8:   1680.40   0.002500   12.60  0.000500  ( 0.000000  0.020000  0.000000)
      9:   3470.00   0.000200    1.00  0.000020  ( 0.000000  0.000000  0.004000)
     10:   3590.00   0.001000    5.10  0.000050  ( 0.007000  0.000000  0.000000)
     11:   3590.50   0.001000    5.10  0.000050  ( 0.000000  0.007000  0.000000)

""")

NH3_HESS = textwrap.dedent("""\
    $orca_hessian_file

    $ir_spectrum
    12
          0.00       0.00000000       0.00000000       0.00000000       0.00000000       0.00000000
          0.00       0.00000000       0.00000000       0.00000000       0.00000000       0.00000000
          0.00       0.00000000       0.00000000       0.00000000       0.00000000       0.00000000
          0.00       0.00000000       0.00000000       0.00000000       0.00000000       0.00000000
          0.00       0.00000000       0.00000000       0.00000000       0.00000000       0.00000000
          0.00       0.00000000       0.00000000       0.00000000       0.00000000       0.00000000
       1066.50       0.03000000     150.00000000       0.00000000       0.00000000       0.09000000
       1680.10       0.00250000      12.60000000       0.02000000       0.00000000       0.00000000
       1680.40       0.00250000      12.60000000       0.00000000       0.02000000       0.00000000
       3470.00       0.00020000       1.00000000       0.00000000       0.00000000       0.00400000
       3590.00       0.00100000       5.10000000       0.00700000       0.00000000       0.00000000
       3590.50       0.00100000       5.10000000       0.00000000       0.00700000       0.00000000

    $end
""")


class TestParseFileContent:
    def test_routes_by_kind(self):
        assert parse_file_content("a.hess", SINGLE_MODE_HESS).from_hessian is True
        xyz = parse_file_content("a.xyz", "1\nE -1.5\nHe 0 0 0\n")
        assert xyz.trajectory[0].energy == pytest.approx(-1.5)
        out = parse_file_content("a.out", IR_OUTPUT)
        assert out.from_hessian is False
        assert len(out.vibrations) == 1


class TestParseContents:
    def test_output_then_hessian_merges_close_frequencies(self):
        data = parse_contents([("h2.out", IR_OUTPUT), ("h2.hess", SINGLE_MODE_HESS)])
        assert len(data.vibrations) == 1
        vib = data.vibrations[0]
        assert vib.frequency == pytest.approx(44.92)
        assert vib.intensity == 0.0
        assert len(vib.vectors) == len(data.atoms) == 2
        assert vib.vectors[0] == pytest.approx((0.0, 0.0, 0.7))

    def test_frequencies_just_outside_tolerance_stay_apart(self):
        hess = SINGLE_MODE_HESS.replace("44.95", "45.03")
        data = parse_contents([("h2.out", IR_OUTPUT), ("h2.hess", hess)])
        assert [v.frequency for v in data.vibrations] == pytest.approx([44.92, 45.03])
        assert [v.mode for v in data.vibrations] == [6, 7]
        assert data.vibrations[1].intensity == pytest.approx(5.0)

    def test_hessian_records_get_unused_mode_numbers(self):
        data = parse_contents([("nh3.out", NH3_OUTPUT), ("nh3.hess", NH3_HESS)])
        modes = [v.mode for v in data.vibrations]
        assert modes == [6, 7, 8, 9, 10, 11, 12]
        assert len(set(modes)) == len(modes)
        assert data.vibrations[-1].frequency == 0.0

    def test_output_after_hessian_updates_its_own_mode(self):
        data = parse_contents([
            ("nh3.out", NH3_OUTPUT),
            ("nh3.hess", NH3_HESS),
            ("nh3_b.out", NH3_OUTPUT.replace("1066.50   0.030000  150.00", "1070.00   0.030000  155.00")),
        ])
        assert len(data.vibrations) == 7
        assert data.vibrations[0].frequency == pytest.approx(1070.0)
        assert data.vibrations[0].intensity == pytest.approx(155.0)
        assert data.vibrations[-1].frequency == 0.0

    def test_hessian_atoms_do_not_replace_output_geometry(self):
        data = parse_contents([("h2.out", IR_OUTPUT), ("h2.hess", SINGLE_MODE_HESS)])
        assert data.atoms[1].z == pytest.approx(0.74)
        assert [(b.source, b.target) for b in data.bonds] == [(0, 1)]

    def test_hessian_alone_provides_geometry_and_vectors(self):
        data = parse_contents([("h2.hess", SINGLE_MODE_HESS)])
        assert len(data.atoms) == 2
        assert data.atoms[1].z == pytest.approx(2.0 * 0.529177210903)
        assert data.vibrations[0].intensity == pytest.approx(5.0)
        assert data.vibrations[0].vectors[1] == pytest.approx((0.0, 0.0, -0.7))

    def test_trajectories_are_concatenated(self, opt_output):
        data = parse_contents([("first.out", opt_output), ("second.out", opt_output)])
        assert len(data.trajectory) == 4
        assert [s.cycle for s in data.trajectory] == [0, 1, 2, 3]
        assert [c.cycle for c in data.geometry_convergence] == [1, 2, 3, 4]
        assert [it.iteration for it in data.scf_convergence] == [1, 2, 3, 4]
        assert data.source_files == ["first.out", "second.out"]

    def test_leading_energy_attaches_to_previous_file(self):
        geometry = "CARTESIAN COORDINATES (ANGSTROEM)\n  He  0.0  0.0  0.0\n\n"
        energy = "FINAL SINGLE POINT ENERGY      -2.861679\n"
        data = parse_contents([("geom.out", geometry), ("energy.out", energy)])
        assert data.trajectory[0].energy == pytest.approx(-2.861679)
        assert data.final_energy == pytest.approx(-2.861679)

    def test_later_file_wins_single_values(self, opt_output, properties_output):
        data = parse_contents([("opt.out", opt_output), ("props.out", properties_output)])
        assert data.version == "5.0.4"
        assert data.terminated_normally is True
        assert data.final_energy == pytest.approx(-76.326124770)
        assert len(data.trajectory) == 3
        assert data.thermo.gibbs_free_energy == pytest.approx(-76.32244848)
        assert len(data.bonds) == 2

    def test_empty_input(self):
        data = parse_contents([])
        assert data.atoms == []
        assert data.bonds == []


class TestMerge:
    def test_per_atom_collections_merge_by_index(self):
        aggregate = OrcaData(mulliken_charges=[AtomicCharge(0, "O", -0.6), AtomicCharge(1, "H", 0.3)])
        aggregate.merge(OrcaData(mulliken_charges=[AtomicCharge(1, "H", 0.35), AtomicCharge(2, "H", 0.25)]))
        assert [(c.atom_index, c.charge) for c in aggregate.mulliken_charges] == [(0, -0.6), (1, 0.35), (2, 0.25)]

    def test_thermo_merges_field_by_field(self, properties_output):
        aggregate = parse_contents([("props.out", properties_output)])
        partial = parse_contents([("extra.out", "Total Enthalpy                    ...    -76.1 Eh\n")])
        aggregate.merge(partial)
        assert aggregate.thermo.enthalpy == pytest.approx(-76.1)
        assert aggregate.thermo.zpe == pytest.approx(0.02136759)
        assert aggregate.thermo.temperature == pytest.approx(298.15)

    def test_temperature_survives_file_without_one(self):
        first = textwrap.dedent("""\
            Temperature         ...   350.00 K
            Total Enthalpy                    ...    -76.30097955 Eh
        """)
        second = "Final Gibbs free energy         ...    -76.32244848 Eh\n"
        data = parse_contents([("a.out", first), ("b.out", second)])
        assert data.thermo.temperature == pytest.approx(350.0)
        assert data.thermo.enthalpy == pytest.approx(-76.30097955)
        assert data.thermo.gibbs_free_energy == pytest.approx(-76.32244848)

    def test_unprinted_temperature_is_none(self):
        data = parse_contents([("b.out", "Final Gibbs free energy         ...    -76.32244848 Eh\n")])
        assert data.thermo.temperature is None

    def test_to_dict_hides_reader_fields(self, properties_output):
        result = parse_contents([("props.out", properties_output)]).to_dict()
        assert "normal_modes" not in result
        assert "leading_energy" not in result
        assert result["atoms"][0]["element"] == "O"
        assert result["bonds"][0] == {"source": 0, "target": 1, "order": 1}


class TestParseFiles:
    def test_reads_from_disk(self, tmp_path, opt_output):
        path = tmp_path / "water.out"
        path.write_text(opt_output, encoding="utf-8")
        data = parse_files([path])
        assert len(data.trajectory) == 2
        assert data.source_files == [str(path)]

    def test_missing_file_aborts(self, tmp_path, opt_output):
        good = tmp_path / "water.out"
        good.write_text(opt_output, encoding="utf-8")
        missing = tmp_path / "missing.out"
        with pytest.raises(OrcaReadError) as excinfo:
            parse_files([good, missing])
        assert excinfo.value.path == missing
        assert "missing.out" in str(excinfo.value)

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(OrcaReadError):
            parse_files([tmp_path])
