"""
Fixed-width text report for one core:
    piecewise interpolation lines, the global least-squares line, then the cubic spline lines.
"""
import os
import logging
import numpy as np
from coreTempFit.curve_fitting.cubic_spline_torch import convert_coeff

logger = logging.getLogger(__name__)

SINGULAR_WARNING = "Warning: System is singular or nearly singular"

def format_linear(x1, x2, intercept, slope, label):
    return "%8d <= x <= %8d ; y = %12.4f + %12.4f x ; %s" % (x1, x2, intercept, slope, label)

def format_cubic_standard(x1, x2, A, B, C, D):
    return "%8d <= x <= %8d ; y = %12.4f + %12.4f x + %12.4f x^2 + %12.4f x^3 ; cubic-spline" % (x1, x2, A, B, C, D)

def format_cubic_shifted(x1, x2, a, b, c, d):
    return "%8d <= x <= %8d ; y = %12.4f + %12.4f(x-%d) + %12.4f(x-%d)^2 + %12.4f(x-%d)^3 ; cubic-spline" \
        % (x1, x2, a, b, x1, c, x1, d, x1)

def format_core_report(times, core_fit, spline_form='standard'):
    """
    Lines of the report for one core. core_fit is a CoreFit from fit_cores.
    spline_form is 'standard' (powers of x) or 'shifted' (powers of x - t[i]).
    """
    times = np.asarray(times, dtype=np.int64)
    lines = []

    intercepts = core_fit.piecewise.intercept.numpy()
    slopes = core_fit.piecewise.slope.numpy()
    for i in range(len(slopes)):
        lines.append(format_linear(times[i], times[i+1], intercepts[i], slopes[i], 'interpolation'))

    if core_fit.least_squares is None:
        lines.append(SINGULAR_WARNING)
    else:
        lines.append(format_linear(times[0], times[-1], float(core_fit.least_squares.intercept),
                                   float(core_fit.least_squares.slope), 'least-squares'))

    spline = core_fit.spline
    if spline_form == 'standard':
        coeff_mat = convert_coeff(*spline).numpy()
        for i in range(len(coeff_mat)):
            lines.append(format_cubic_standard(times[i], times[i+1], *coeff_mat[i]))
    elif spline_form == 'shifted':
        _, a, b, c, d = [param.numpy() for param in spline]
        for i in range(len(a)):
            lines.append(format_cubic_shifted(times[i], times[i+1], a[i], b[i], c[i], d[i]))
    else:
        raise ValueError("spline_form must be 'standard' or 'shifted', got %r" % spline_form)

    return lines

def write_core_report(times, core_fit, core_idx, output_dir='.', prefix='core', spline_form='standard'):
    filename = os.path.join(output_dir, prefix + str(core_idx) + '.txt')
    lines = format_core_report(times, core_fit, spline_form=spline_form)
    with open(filename, 'w', encoding='utf-8') as output_file:
        for line in lines:
            output_file.write(line + "\n")

    logger.info("Report for core %d written to '%s'", core_idx, filename)
    return filename
