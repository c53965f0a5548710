"""
Tests for the Thomas algorithm and the 2x2 Cramer's rule solver.

Usage:
python -m pytest tests/tst_linear_solvers.py
"""
import numpy as np
import pytest
import torch
from coreTempFit.curve_fitting.tridiagonal import solve_tridiagonal
from coreTempFit.curve_fitting.linear_solve import solve_2x2, SingularMatrixError
torch.set_default_dtype(torch.float64)


def tst_tridiagonal_matches_dense_solve():
    a = torch.tensor([0., 1., 2., 1., 3.])
    b = torch.tensor([4., 5., 6., 5., 7.])
    c = torch.tensor([1., 2., 1., 2., 0.])
    d = torch.tensor([1., -2., 3., 0.5, 4.])

    dense = torch.diag(b) + torch.diag(a[1:], -1) + torch.diag(c[:-1], 1)
    x_reference = torch.linalg.solve(dense, d)

    x = solve_tridiagonal(a, b, c, d)
    np.testing.assert_allclose(x.numpy(), x_reference.numpy(), rtol=1e-12, atol=1e-12)

def tst_tridiagonal_single_row():
    x = solve_tridiagonal(torch.tensor([0.]), torch.tensor([4.]), torch.tensor([0.]), torch.tensor([2.]))
    np.testing.assert_allclose(x.numpy(), [0.5])

def tst_tridiagonal_bad_input():
    with pytest.raises(ValueError):
        solve_tridiagonal(torch.zeros(0), torch.zeros(0), torch.zeros(0), torch.zeros(0))
    with pytest.raises(ValueError):
        solve_tridiagonal(torch.zeros(2), torch.ones(3), torch.zeros(3), torch.ones(3))

def tst_solve_2x2():
    A = torch.tensor([[2., 1.], [1., 3.]])
    b = torch.tensor([3., 5.])
    x = solve_2x2(A, b)
    np.testing.assert_allclose(x.numpy(), [0.8, 1.4])
    np.testing.assert_allclose((A @ x).numpy(), b.numpy())

def tst_solve_2x2_singular():
    with pytest.raises(SingularMatrixError):
        solve_2x2([[1., 2.], [2., 4.]], [1., 2.])
    with pytest.raises(ArithmeticError):
        solve_2x2([[1e-6, 0.], [0., 1e-5]], [1., 1.])
