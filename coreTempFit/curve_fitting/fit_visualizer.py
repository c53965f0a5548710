import matplotlib.pyplot as plt
import numpy as np
import torch
from coreTempFit.curve_fitting.cubic_spline_torch import evaluate_spline

def create_figures(times, temps, core_fit, prefix="core0", samples_per_segment=20):
    """
    Saves the readings with the three fits on top of them, returns the filename
    """
    times = np.asarray(times, dtype=np.float64)
    temps = np.asarray(temps, dtype=np.float64)

    plt.figure(figsize=(20,10))
    plt.plot(times, temps, 'k.', label="readings")
    plt.plot(times, temps, 'r', label="interpolation")

    if core_fit.least_squares is not None:
        intercept = float(core_fit.least_squares.intercept)
        slope = float(core_fit.least_squares.slope)
        plt.plot(times, intercept + slope*times, 'g', label="least-squares")

    if len(times) >= 2:
        x_dense = np.linspace(times[0], times[-1], samples_per_segment*(len(times)-1) + 1)
        y_dense = evaluate_spline(torch.tensor(x_dense), core_fit.spline, torch.tensor(times))
        plt.plot(x_dense, y_dense.numpy(), 'b', label="cubic-spline")

    plt.xlabel("time (s)")
    plt.ylabel("temperature (C)")
    plt.legend()
    filename = prefix + "_fits.png"
    plt.savefig(filename)
    plt.close()
    return filename
