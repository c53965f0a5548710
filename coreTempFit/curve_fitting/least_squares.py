"""
Global linear least squares y = intercept + slope*x over a whole series.

There are two independent solves: global_least_squares solves the normal
equations in closed form, global_least_squares_matrix builds X^T X | X^T Y and
hands it to solve_2x2. They are expected to agree to rounding.
"""
import torch
from coreTempFit.curve_fitting.fit_types import LinearFit, EmptySeriesError, as_series
from coreTempFit.curve_fitting.linear_solve import solve_2x2, SINGULAR_TOLERANCE


class SingularSystemError(ArithmeticError):
    pass


def normal_equation_sums(times, temps):
    """
    returns n, sum(x), sum(y), sum(x*y), sum(x**2)
    """
    x, y = as_series(times, temps)
    n = len(x)
    if n == 0:
        raise EmptySeriesError("Nothing to process, series is empty")
    return n, torch.sum(x), torch.sum(y), torch.sum(x*y), torch.sum(x*x)

def global_least_squares(times, temps, tolerance=SINGULAR_TOLERANCE):
    n, sum_x, sum_y, sum_xy, sum_x2 = normal_equation_sums(times, temps)

    # [n     sum_x ] [intercept] = [sum_y ]
    # [sum_x sum_x2] [slope    ]   [sum_xy]
    det = n*sum_x2 - sum_x*sum_x
    if torch.abs(det) < tolerance:
        raise SingularSystemError("System is singular or nearly singular, det = %g" % float(det))

    intercept = (sum_y*sum_x2 - sum_x*sum_xy) / det
    slope = (n*sum_xy - sum_x*sum_y) / det
    return LinearFit(intercept, slope)

def global_least_squares_matrix(times, temps, tolerance=SINGULAR_TOLERANCE):
    n, sum_x, sum_y, sum_xy, sum_x2 = normal_equation_sums(times, temps)

    xtx = torch.zeros((2, 2), dtype=torch.float64)
    xtx[0, 0] = n
    xtx[0, 1] = sum_x
    xtx[1, 0] = sum_x
    xtx[1, 1] = sum_x2
    xty = torch.stack([sum_y, sum_xy])

    intercept, slope = solve_2x2(xtx, xty, tolerance=tolerance)
    return LinearFit(intercept, slope)
