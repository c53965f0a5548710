import torch

SINGULAR_TOLERANCE = 1e-10


class SingularMatrixError(ArithmeticError):
    pass


def determinant_2x2(A):
    return A[0][0]*A[1][1] - A[0][1]*A[1][0]

def solve_2x2(A, b, tolerance=SINGULAR_TOLERANCE):
    """
    Solves A*x = b for a 2x2 matrix A with Cramer's rule.
    Raises SingularMatrixError when |det(A)| < tolerance.
    """
    A = torch.as_tensor(A, dtype=torch.float64)
    b = torch.as_tensor(b, dtype=torch.float64)

    det = determinant_2x2(A)
    if torch.abs(det) < tolerance:
        raise SingularMatrixError("Matrix is singular, det = %g" % float(det))

    x0 = (b[0]*A[1][1] - A[0][1]*b[1]) / det
    x1 = (A[0][0]*b[1] - b[0]*A[1][0]) / det
    return torch.stack([x0, x1])
