"""
Fits every CPU core in a temperature log and writes one report per core (core0.txt, core1.txt, ...).

For each core the report holds the piecewise linear interpolation, the global linear
least-squares line and the natural cubic spline. A singular least-squares system only
drops the least-squares line for that core, everything else is still written.

Usage:
python -m coreTempFit.curve_fitting.fit_cores sample_input.txt --output-dir reports --spline-form shifted
"""
import os
import sys
import logging
import argparse
from collections import namedtuple
import numpy as np
import torch
from scipy.interpolate import CubicSpline
from coreTempFit.curve_fitting.fit_types import EmptySeriesError, as_series
from coreTempFit.curve_fitting.linear_solve import SingularMatrixError
from coreTempFit.curve_fitting.piecewise_linear import piecewise_linear_fit
from coreTempFit.curve_fitting.least_squares import global_least_squares, global_least_squares_matrix, \
    SingularSystemError
from coreTempFit.curve_fitting.cubic_spline_torch import natural_cubic_spline_coeffs
from coreTempFit.curve_fitting.temperature_log import read_temperature_log, DEFAULT_STEP
from coreTempFit.curve_fitting.report import write_core_report
from coreTempFit.curve_fitting.fit_visualizer import create_figures

logger = logging.getLogger(__name__)

# least_squares and least_squares_matrix are None when the system was singular
CoreFit = namedtuple('CoreFit', ['piecewise', 'least_squares', 'least_squares_matrix', 'spline'])


def fit_core(times, temps):
    times, temps = as_series(times, temps)
    if len(times) == 0:
        raise EmptySeriesError("Nothing to process, series is empty")

    piecewise = piecewise_linear_fit(times, temps)

    try:
        least_squares = global_least_squares(times, temps)
    except SingularSystemError as e:
        logger.warning("Skipping least-squares fit: %s", e)
        least_squares = None

    try:
        least_squares_matrix = global_least_squares_matrix(times, temps)
    except SingularMatrixError as e:
        logger.warning("Skipping matrix least-squares fit: %s", e)
        least_squares_matrix = None

    spline = natural_cubic_spline_coeffs(times, temps)
    return CoreFit(piecewise, least_squares, least_squares_matrix, spline)

def fit_all_cores(times, core_readings):
    """
    core_readings is cores x readings, one row per core
    """
    if len(times) == 0 or len(core_readings) == 0:
        logger.warning("Nothing to process, check parser!")
        return []

    core_fits = []
    for core_idx, temps in enumerate(core_readings):
        core_fit = fit_core(times, temps)
        if core_fit.least_squares_matrix is not None:
            logger.info("Matrix method, core %d: y = %.4f + %.4f * x", core_idx,
                        float(core_fit.least_squares_matrix.intercept), float(core_fit.least_squares_matrix.slope))
        core_fits.append(core_fit)
    return core_fits

def verify_against_scipy(times, temps, spline):
    """
    Largest absolute difference between our shifted coefficients and scipy's natural CubicSpline.
    Returns 0 when there are fewer than 3 points (no interior knots to compare).
    """
    times, temps = as_series(times, temps)
    if len(times) < 3:
        return 0.0
    cs = CubicSpline(times.numpy(), temps.numpy(), bc_type='natural')
    coeff_check = torch.stack([spline.d, spline.c, spline.b, spline.a]).numpy()
    return float(np.max(np.abs(cs.c - coeff_check)))

def log_input_table(times, core_readings):
    header = "Time(s) " + "".join(" Core%-3d" % i for i in range(len(core_readings)))
    logger.info(header)
    for i in range(len(times)):
        logger.info("%7d " + "".join(" %7.1f" for _ in core_readings), times[i], *core_readings[:, i])

def main(argv=None):
    parser = argparse.ArgumentParser(description='Piecewise linear, least-squares and cubic spline fits of CPU core temperatures')
    parser.add_argument('input', type=str,
                        help='raw temperature log, one line per reading and one column per core')
    parser.add_argument('--step', type=int, default=DEFAULT_STEP,
                        help='seconds between readings')
    parser.add_argument('--output-dir', type=str, default='.',
                        help='directory the core reports are written to')
    parser.add_argument('--prefix', type=str, default='core',
                        help='report filename prefix, reports are named [PREFIX][CORE].txt')
    parser.add_argument('--spline-form', type=str, default='standard', choices=['standard', 'shifted'],
                        help='write spline segments in powers of x or in powers of (x - left knot)')
    parser.add_argument('--plot', action='store_true', default=False,
                        help='save a figure per core next to the reports')
    parser.add_argument('--verify', action='store_true', default=False,
                        help='compare spline coefficients with scipy CubicSpline')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    args = parser.parse_args(argv)
    torch.set_default_dtype(torch.float64)

    logging.basicConfig(level=getattr(logging, args.log_level), format='%(asctime)s %(levelname)s %(message)s')
    logger.info('args = %s', args)

    try:
        times, core_readings = read_temperature_log(args.input, step=args.step)
    except (OSError, ValueError) as e:
        logger.error("Error reading %s: %s", args.input, e)
        return 1

    log_input_table(times, core_readings)
    core_fits = fit_all_cores(times, core_readings)
    if not core_fits:
        return 0

    os.makedirs(args.output_dir, exist_ok=True)
    for core_idx, core_fit in enumerate(core_fits):
        write_core_report(times, core_fit, core_idx, output_dir=args.output_dir,
                          prefix=args.prefix, spline_form=args.spline_form)

        if args.verify:
            max_diff = verify_against_scipy(times, core_readings[core_idx], core_fit.spline)
            logger.info("Core %d spline vs scipy CubicSpline, max coefficient difference %g", core_idx, max_diff)

        if args.plot:
            prefix = os.path.join(args.output_dir, args.prefix + str(core_idx))
            create_figures(times, core_readings[core_idx], core_fit, prefix=prefix)

    return 0

if __name__ == '__main__':
    sys.exit(main())
