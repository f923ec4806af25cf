"""Shared ORCA output snippets."""

import textwrap

import pytest


OPT_OUTPUT = textwrap.dedent("""\
                         *****************
                         * O   R   C   A *
                         *****************

                      Program Version 5.0.4 -  RELEASE  -

    Total Charge           Charge          ....    0
    Multiplicity           Mult            ....    1

                            *************************************************
                            *               GEOMETRY OPTIMIZATION CYCLE   1            *
                            *************************************************
    ---------------------------------
    CARTESIAN COORDINATES (ANGSTROEM)
    ---------------------------------
      O      0.000000    0.000000    0.119262
      H      0.000000    0.763239   -0.477047
      H      0.000000   -0.763239   -0.477047

    ----------------------------
    CARTESIAN COORDINATES (A.U.)
    ----------------------------
      NO LB      ZA    FRAG     MASS         X           Y           Z
       0 O     8.0000    0    15.999    0.000000    0.000000    0.225373

    Total Energy       :          -76.32363510 Eh           -2076.86108 eV

    -------------------------   --------------------
    FINAL SINGLE POINT ENERGY       -76.323635101
    -------------------------   --------------------

                                    .--------------------.
              ----------------------|Geometry convergence|-------------------------
              Item                value                   Tolerance       Converged
              ---------------------------------------------------------------------
              Energy change      -0.0064331427            0.0000050000      NO
              RMS gradient        0.0175040316            0.0001000000      NO
              MAX gradient        0.0263281130            0.0003000000      NO
              RMS step            0.0270713453            0.0020000000      NO
              MAX step            0.0401246009            0.0040000000      NO
              ........................................................
              Max(Bonds)      0.0277    Max(Angles)    1.74
              ---------------------------------------------------------------------

                            *************************************************
                            *               GEOMETRY OPTIMIZATION CYCLE   2            *
                            *************************************************
    ---------------------------------
    CARTESIAN COORDINATES (ANGSTROEM)
    ---------------------------------
      O      0.000000    0.000000    0.126985
      H      0.000000    0.755326   -0.480909
      H      0.000000   -0.755326   -0.480909

    Total Energy       :          -76.32612477 Eh           -2076.93883 eV

    -------------------------   --------------------
    FINAL SINGLE POINT ENERGY       -76.326124770
    -------------------------   --------------------

                                    .--------------------.
              ----------------------|Geometry convergence|-------------------------
              Item                value                   Tolerance       Converged
              ---------------------------------------------------------------------
              Energy change      -0.0024896693            0.0000050000      NO
              RMS gradient        0.0021545823            0.0001000000      NO
              MAX gradient        0.0028841215            0.0003000000      NO
              RMS step            0.0052046870            0.0020000000      NO
              MAX step            0.0078113564            0.0040000000      NO
              ........................................................
              Max(Bonds)      0.0041    Max(Angles)    0.31
              ---------------------------------------------------------------------

                        ***********************HURRAY********************
                        ***        THE OPTIMIZATION HAS CONVERGED     ***
                        *************************************************
""")


PROPERTIES_OUTPUT = textwrap.dedent("""\
    ---------------------------------
    CARTESIAN COORDINATES (ANGSTROEM)
    ---------------------------------
      O      0.000000    0.000000    0.126985
      H      0.000000    0.755326   -0.480909
      H      0.000000   -0.755326   -0.480909

    ----------------
    ORBITAL ENERGIES
    ----------------

      NO   OCC          E(Eh)            E(eV)
       0   2.0000     -18.937474      -515.3150
       1   2.0000      -0.935213       -25.4484
       2   2.0000      -0.477870       -13.0035
       3   2.0000      -0.330436        -8.9916
       4   2.0000      -0.253918        -6.9095
       5   0.0000       0.041860         1.1391
       6   0.0000       0.115770         3.1503

                        ********************************
                        * MULLIKEN POPULATION ANALYSIS *
                        ********************************

    -----------------------
    MULLIKEN ATOMIC CHARGES
    -----------------------
       0 O :   -0.652345
       1 H :    0.326172
       2 H :    0.326173
    Sum of atomic charges:   -0.0000000

    ----------------------
    LOEWDIN ATOMIC CHARGES
    ----------------------
       0 O :   -0.412210
       1 H :    0.206105
       2 H :    0.206105

    -------------
    DIPOLE MOMENT
    -------------
                                    X             Y             Z
    Electronic contribution:      0.00000       0.00000      -0.43000
    Nuclear contribution   :      0.00000       0.00000       1.20000
                            -----------------------------------------
    Total Dipole Moment    :      0.000000       0.300000      -0.400000
                            -----------------------------------------
    Magnitude (a.u.)       :      0.500000

    -----------
    IR SPECTRUM
    -----------

     Mode   freq       eps      Int      T**2         TX        TY        TZ
           cm**-1   L/(mol*cm) km/mol    a.u.
    ----------------------------------------------------------------------------
      6:   1639.94   0.011586   58.55  0.002205  ( 0.000000 -0.046956  0.000000)
      7:   3833.22   0.000926    4.68  0.000075  ( 0.000000  0.000000 -0.008692)
      8:   3935.55   0.007167   36.22  0.000568  ( 0.000000  0.023844  0.000000)

    * The epsilon (eps) is given for a Dirac delta lineshape.

    --------------------------
    THERMOCHEMISTRY AT 298.15K
    --------------------------

    Temperature         ...   298.15 K
    Pressure            ...     1.00 atm
    Total Mass          ...    18.02 AMU

    Electronic energy                ...    -76.32612477 Eh
    Zero point energy                ...      0.02136759 Eh      13.41 kcal/mol
    Total thermal energy                    -76.30192376 Eh

    Total Enthalpy                    ...    -76.30097955 Eh

    Total entropy correction          ...     -0.02146893 Eh    -13.47 kcal/mol

    Final Gibbs free energy         ...    -76.32244848 Eh

    --------------------------
    CHEMICAL SHIELDING SUMMARY (ppm)
    --------------------------


      Nucleus  Element    Isotropic     Anisotropy
      -------  -------  ------------   ------------
          0       O          325.123         52.456
          1       H           30.987         19.123
          2       H           30.988         19.124

                                 ****ORCA TERMINATED NORMALLY****
""")


@pytest.fixture
def opt_output():
    return OPT_OUTPUT


@pytest.fixture
def properties_output():
    return PROPERTIES_OUTPUT
