"""
Natural cubic spline fit in PyTorch.

On [t[i], t[i+1]] the spline is
    a + b*(x-t[i]) + c*(x-t[i])**2 + d*(x-t[i])**3
with the second derivatives M solved from a tridiagonal system and M[0] = M[-1] = 0.
convert_coeff rewrites a segment as A + B*x + C*x**2 + D*x**3.
"""
import torch
from coreTempFit.curve_fitting.fit_types import ShiftedCubic, as_series
from coreTempFit.curve_fitting.tridiagonal import solve_tridiagonal

def natural_cubic_spline_second_derivatives(times, temps):
    """
    Second derivative of the natural spline at every knot.
    Fewer than 3 points leaves no interior knot, so all second derivatives are zero
    and the spline reduces to straight lines.
    """
    t, y = as_series(times, temps)
    n = len(t)
    if n < 3:
        return torch.zeros(n, dtype=torch.float64)

    a = torch.zeros(n, dtype=torch.float64) # subdiagonal
    b = torch.zeros(n, dtype=torch.float64) # diagonal
    c = torch.zeros(n, dtype=torch.float64) # superdiagonal
    d = torch.zeros(n, dtype=torch.float64) # right-hand side

    # natural boundary rows, M[0] = M[n-1] = 0
    b[0] = 1.0
    b[n-1] = 1.0

    h_i = t[1:-1] - t[:-2]
    h_i1 = t[2:] - t[1:-1]
    a[1:-1] = h_i
    b[1:-1] = 2.0*(h_i + h_i1)
    c[1:-1] = h_i1
    d[1:-1] = 6.0*((y[2:] - y[1:-1])/h_i1 - (y[1:-1] - y[:-2])/h_i)

    return solve_tridiagonal(a, b, c, d)

def natural_cubic_spline_coeffs(times, temps):
    """
    Shifted coefficients for each of the n-1 segments, returned as a ShiftedCubic.
    Fewer than 2 points gives no segments.
    """
    t, y = as_series(times, temps)
    if len(t) < 2:
        empty = torch.zeros(0, dtype=torch.float64)
        return ShiftedCubic(empty, empty, empty, empty, empty)

    M = natural_cubic_spline_second_derivatives(t, y)
    h = t[1:] - t[:-1]

    a = y[:-1]
    b = (y[1:] - y[:-1])/h - h*(2*M[:-1] + M[1:])/6.0
    c = M[:-1]/2.0
    d = (M[1:] - M[:-1])/(6.0*h)
    return ShiftedCubic(t[:-1], a, b, c, d)

def convert_coeff(shift, a, b, c, d):
    """
    Inputs are in the form given by func(...)
    This function converts to the form of A*x**0 + B*x**1 + C*x**2 + D*x**3
    Output is segments x powers
    """
    A = a - b*shift + c*shift**2 - d*shift**3
    B = b - c*2*shift + d*3*shift**2
    C = c - d*3*shift
    D = d
    return torch.stack([A, B, C, D], axis=1)

def func(x, shift, a, b, c, d):
    return a + b*(x-shift) + c*(x-shift)**2 + d*(x-shift)**3

def func_derivative(x, shift, a, b, c, d, order=1):
    if order == 1:
        return b + 2*c*(x-shift) + 3*d*(x-shift)**2
    elif order == 2:
        return 2*c + 6*d*(x-shift)
    else:
        raise ValueError("order must be 1 or 2")

def func_reformatted(x, power, coeff):
    return torch.sum(coeff*(x**power), axis=1)

def find_interval_inds(knots, x):
    """
    Index of the segment each value of x falls in, knots[ind] <= x < knots[ind+1].
    Points outside the knots are assigned to the first or last segment.
    """
    interval_inds = torch.searchsorted(knots, x, right=True) - 1
    return torch.clamp(interval_inds, 0, len(knots) - 2)

def evaluate_spline(x, spline, knots):
    """
    Evaluates the spline at x, knots are the full set of times used for the fit
    """
    x = torch.atleast_1d(torch.as_tensor(x, dtype=torch.float64))
    knots = torch.as_tensor(knots, dtype=torch.float64)
    interval_inds = find_interval_inds(knots, x)
    return func(x, *[param[interval_inds] for param in spline])
