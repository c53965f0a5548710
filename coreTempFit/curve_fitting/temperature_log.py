"""
Reads raw CPU temperature logs.

Each line holds one reading per core, whitespace separated. Values may be written the way
lm-sensors prints them:
    +61.0°C +63.0°C +50.0°C +58.0°C
or as plain numbers:
    61.0 63.0 50.0 58.0
Readings are taken every `step` seconds, so line k is at time k*step.
"""
import numpy as np

DEFAULT_STEP = 30

def parse_temperature(token):
    value = token.strip().lstrip('+')
    for suffix in ('°C', '°', 'C'):
        if value.endswith(suffix):
            value = value[:-len(suffix)]
            break
    return float(value)

def parse_raw_temps(lines, step=DEFAULT_STEP):
    """
    Returns times (int64, one per reading) and core_readings (float64, cores x readings)
    """
    rows = []
    for line_number, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue
        try:
            row = [parse_temperature(token) for token in tokens]
        except ValueError:
            raise ValueError("line %d: could not parse temperatures from %r" % (line_number, line.strip()))
        if rows and len(row) != len(rows[0]):
            raise ValueError("line %d: expected %d cores, found %d" % (line_number, len(rows[0]), len(row)))
        rows.append(row)

    times = np.arange(len(rows), dtype=np.int64) * step
    if not rows:
        return times, np.zeros((0, 0), dtype=np.float64)

    core_readings = np.array(rows).astype(np.float64).T
    return times, core_readings

def read_temperature_log(filename, step=DEFAULT_STEP):
    with open(filename, 'r', encoding='utf-8') as source_file:
        lines = source_file.readlines()

    return parse_raw_temps(lines, step=step)
