"""
Checks that convert_coeff (standard basis) and func (shifted basis) describe the same cubic.

Usage:
python -m pytest tests/tst_convert_coeff.py
"""
import numpy as np
import torch
from coreTempFit.curve_fitting.cubic_spline_torch import func, convert_coeff, func_reformatted, \
    natural_cubic_spline_coeffs, find_interval_inds, evaluate_spline
torch.set_default_dtype(torch.float64) # important to prevent numerical errors


def tst_single_segment():
    shift = torch.tensor([1.])
    x = torch.tensor([6.5])
    power = torch.tensor([0, 1, 2, 3])[None]
    a, b, c, d = torch.arange(2., 6.)[:,None]
    fdp_0 = func(x, shift, a, b, c, d)
    coeff_new = convert_coeff(shift, a, b, c, d)
    fdp_1 = func_reformatted(x[:,None], power, coeff_new)
    assert torch.allclose(fdp_0, fdp_1, rtol=1e-05, atol=1e-08, equal_nan=False)

def tst_known_expansion():
    # 1 + 2(x-3) + 0.5(x-3)^2 + 0.25(x-3)^3 = -7.25 + 5.75x - 1.75x^2 + 0.25x^3
    coeff = convert_coeff(torch.tensor([3.]), torch.tensor([1.]), torch.tensor([2.]), torch.tensor([0.5]), torch.tensor([0.25]))
    np.testing.assert_allclose(coeff.numpy(), [[-7.25, 5.75, -1.75, 0.25]])

def tst_spline_segments():
    times = torch.tensor([0., 30., 60., 90., 120.])
    temps = torch.tensor([45.0, 47.5, 52.0, 51.0, 49.5])
    spline = natural_cubic_spline_coeffs(times, temps)
    coeff_mat = convert_coeff(*spline)
    assert coeff_mat.shape == (4, 4)

    power = torch.tensor([0, 1, 2, 3])[None]
    x = torch.tensor([5., 44., 61., 119.])
    interval_inds = find_interval_inds(times, x)
    assert interval_inds.tolist() == [0, 1, 2, 3]

    shifted = func(x, *[param[interval_inds] for param in spline])
    standard = func_reformatted(x[:,None], power, coeff_mat[interval_inds])
    assert torch.allclose(shifted, standard, rtol=1e-9, atol=1e-9)

def tst_evaluate_spline_at_knots():
    times = [0, 30, 60, 90, 120]
    temps = [45.0, 47.5, 52.0, 51.0, 49.5]
    spline = natural_cubic_spline_coeffs(times, temps)
    values = evaluate_spline(times, spline, times)
    np.testing.assert_allclose(values.numpy(), temps, atol=1e-9)

def tst_find_interval_inds_clamps():
    knots = torch.tensor([0., 10., 20.])
    interval_inds = find_interval_inds(knots, torch.tensor([-5., 0., 10., 20., 25.]))
    assert interval_inds.tolist() == [0, 0, 1, 1, 1]
