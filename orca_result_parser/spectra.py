"""Broadened spectra for plotting collaborators (numbers only, no drawing)."""
import numpy as np


def lorentzian(x, x0, gamma):
    return (1 / np.pi) * (gamma / ((x - x0) ** 2 + gamma ** 2))


def gaussian(x, x0, sigma):
    return np.exp(-0.5 * ((x - x0) / sigma) ** 2)


def ir_spectrum(vibrations, gamma=20.0, step=5.0, padding=500.0):
    """
    Lorentzian-broadened IR curve, each line scaled by its intensity (km/mol).
    Returns (wavenumbers, absorbance) from 0 to the highest frequency + padding.
    """
    if not vibrations:
        return np.array([]), np.array([])
    freqs = np.array([v.frequency for v in vibrations], dtype=float)
    intens = np.array([v.intensity for v in vibrations], dtype=float)
    grid = np.arange(0.0, freqs.max() + padding + step, step)
    curve = np.zeros_like(grid)
    for x0, y0 in zip(freqs, intens):
        curve += y0 * lorentzian(grid, x0, gamma)
    return grid, curve


def uv_vis_spectrum(excitations, sigma=20.0, step=1.0):
    """
    Gaussian-broadened absorption curve in nm, each band scaled by its
    oscillator strength. The window runs 50 nm below the shortest and 100 nm
    above the longest wavelength.
    """
    if not excitations:
        return np.array([]), np.array([])
    wls = np.array([e.wavelength for e in excitations], dtype=float)
    osc = np.array([e.oscillator_strength for e in excitations], dtype=float)
    grid = np.arange(max(0.0, wls.min() - 50.0), wls.max() + 100.0 + step, step)
    curve = np.zeros_like(grid)
    for x0, y0 in zip(wls, osc):
        curve += y0 * gaussian(grid, x0, sigma)
    return grid, curve
