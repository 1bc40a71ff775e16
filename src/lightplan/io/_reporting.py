"""CSV report generation for ranked configurations."""

import csv
import datetime
import io

from .._version import __version__


def _build_rows(configs, precision):
    rows = [["Light Configurations"]]
    rows += [["", "Generated", datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")]]
    rows += [["", "lightplan", __version__]]
    rows += [[""]]
    rows += [["", "Rank", "Area Covered", "Placed", "Unplaced"]]
    for rank, config in enumerate(configs, start=1):
        rows += [
            [
                "",
                rank,
                round(config.area_covered, precision),
                config.num_placed,
                config.num_unplaced,
            ]
        ]
    rows += [[""]]

    # ───  Lights  ───────────────────────────────────────
    rows += [["Lights"]]
    rows += [["", "Rank", "Slot", "x", "y"]]
    for rank, config in enumerate(configs, start=1):
        for slot, light in enumerate(config.lights, start=1):
            if light.is_placed:
                rows += [["", rank, slot, round(light.x, precision), round(light.y, precision)]]
            else:
                rows += [["", rank, slot, "unplaced", "unplaced"]]
    return rows


def rows_to_bytes(rows, encoding="cp1252"):
    """Convert an array of rows to a CSV bytes object."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerows(rows)
    return output.getvalue().encode(encoding)


def generate_report(configs, fname=None, precision=3):
    """
    Write a CSV summary of configurations in the given order.

    Returns the CSV bytes when fname is None.
    """
    csv_bytes = rows_to_bytes(_build_rows(list(configs), precision))
    if fname is not None:
        with open(fname, "wb") as f:
            f.write(csv_bytes)
        return fname
    return csv_bytes
