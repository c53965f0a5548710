import torch

def solve_tridiagonal(a, b, c, d):
    """
    Solves a tridiagonal system with the Thomas algorithm.

    a is the subdiagonal (a[0] unused), b the diagonal, c the superdiagonal (c[-1] unused)
    and d the right-hand side, all of length n.
    There is no pivoting, the system must be diagonally dominant.
    A zero pivot is not caught and shows up as inf/nan in the solution.
    """
    n = len(d)
    if n == 0:
        raise ValueError("tridiagonal system must have at least one row")
    if not (len(a) == len(b) == len(c) == n):
        raise ValueError("a, b, c and d must have the same length")

    c_prime = torch.zeros(n, dtype=torch.float64)
    d_prime = torch.zeros(n, dtype=torch.float64)
    x = torch.zeros(n, dtype=torch.float64)

    # forward elimination
    c_prime[0] = c[0] / b[0]
    d_prime[0] = d[0] / b[0]
    for i in range(1, n):
        denominator = b[i] - a[i] * c_prime[i-1]
        c_prime[i] = c[i] / denominator
        d_prime[i] = (d[i] - a[i] * d_prime[i-1]) / denominator

    # back substitution
    x[n-1] = d_prime[n-1]
    for i in range(n-2, -1, -1):
        x[i] = d_prime[i] - c_prime[i] * x[i+1]

    return x
