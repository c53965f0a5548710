from collections import namedtuple
import torch

# y = intercept + slope*x, fields are tensors (one entry per segment for piecewise fits)
LinearFit = namedtuple('LinearFit', ['intercept', 'slope'])

# a + b*(x-shift) + c*(x-shift)**2 + d*(x-shift)**3 for every segment of a spline
ShiftedCubic = namedtuple('ShiftedCubic', ['shift', 'a', 'b', 'c', 'd'])


class EmptySeriesError(ValueError):
    pass


def as_series(times, temps):
    """
    Converts a time vector and a temperature vector to float64 torch tensors.
    times must be strictly increasing, this is not checked here.
    """
    times = torch.as_tensor(times, dtype=torch.float64)
    temps = torch.as_tensor(temps, dtype=torch.float64)
    if times.shape != temps.shape:
        raise ValueError("times and temps must have the same length, got %d and %d" % (len(times), len(temps)))
    return times, temps
