from coreTempFit.curve_fitting.fit_types import LinearFit, as_series

def piecewise_linear_fit(times, temps):
    """
    Line through each pair of adjacent readings.
    Returns a LinearFit whose intercept and slope have one entry per segment (n-1 of them).
    Repeated time values divide by zero, times must be strictly increasing.
    """
    x, y = as_series(times, temps)
    x1, x2 = x[:-1], x[1:]
    y1, y2 = y[:-1], y[1:]

    slope = (y2 - y1) / (x2 - x1)
    intercept = y1 - slope * x1
    return LinearFit(intercept, slope)
