from ._file_io import (
    parse_lights_file,
    save_configurations,
    load_configurations,
    load_settings,
)
from ._reporting import generate_report, rows_to_bytes

__all__ = [
    # _file_io
    "parse_lights_file",
    "save_configurations",
    "load_configurations",
    "load_settings",
    # _reporting
    "generate_report",
    "rows_to_bytes",
]
