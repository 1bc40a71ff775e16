"""Read/write of search results as versioned .lights JSON files."""

import warnings
import pathlib
from pathlib import Path
import datetime
import json

from packaging.version import InvalidVersion, Version

from .._version import __version__
from ..configuration import LightConfiguration
from ..ranking import RankedConfigurationSet
from ..settings import SearchSettings

EXTENSION = ".lights"
FORMAT_KEY = "configurations"


def parse_lights_file(filedata):
    """Parse a .lights file from various input types (path, string, bytes, dict)."""
    if isinstance(filedata, dict):
        return filedata
    if isinstance(filedata, (str, bytes, bytearray)):
        try:
            load_data = json.loads(filedata)
        except json.JSONDecodeError:
            # Not JSON string, try as file path
            if isinstance(filedata, (bytes, bytearray)):
                raise ValueError("Bytes input is not valid JSON")
            load_data = _load_lights_file(Path(filedata))
    elif isinstance(filedata, pathlib.PurePath):
        load_data = _load_lights_file(filedata)
    else:
        raise TypeError(f"Cannot load configurations from {type(filedata).__name__}")
    if not isinstance(load_data, dict):
        raise ValueError(
            f"Expected a JSON object at the top level, got {type(load_data).__name__}"
        )
    return load_data


def _load_lights_file(path):
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise ValueError(f"Not a file: {path}")
    if path.suffix.lower() != EXTENSION:
        raise ValueError(f"Please provide a valid {EXTENSION} file (got {path.suffix}): {path}")
    with open(path, "r") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed JSON in {path}: {e}") from e


def _make_envelope(format_key=None):
    """Build the common save envelope (version + timestamp)."""
    savedata = {}
    savedata["lightplan_version"] = __version__
    now = datetime.datetime.now().astimezone()
    savedata["timestamp"] = now.strftime("%Y-%m-%d %H:%M:%S %Z%z")
    if format_key:
        savedata["format"] = format_key
    return savedata


def _check_savefile(filename, ext=EXTENSION):
    """Enforce that a savefile has the correct extension."""
    if isinstance(filename, str):
        if not filename.lower().endswith(ext):
            filename += ext
    elif isinstance(filename, pathlib.PurePath):
        if not filename.suffix == ext:
            filename = filename.parent / (filename.name + ext)
    return filename


def _check_version(saved_version):
    try:
        mismatch = Version(saved_version) != Version(__version__)
    except InvalidVersion:
        mismatch = True
    if mismatch:
        warnings.warn(
            f"File was saved with lightplan {saved_version}, "
            f"current version is {__version__}",
            stacklevel=3,
        )


def save_configurations(configs, fname=None, settings: SearchSettings = None):
    """
    Save configurations best-first to a .lights file.

    Returns the JSON string instead when fname is None.
    """
    savedata = _make_envelope(FORMAT_KEY)
    data = {"configurations": [config.to_dict() for config in configs]}
    if settings is not None:
        data["settings"] = settings.to_dict()
    savedata["data"] = data
    if fname is not None:
        filename = _check_savefile(fname)
        with open(filename, "w") as json_file:
            json.dump(savedata, json_file, indent=4)
        return filename
    return json.dumps(savedata, indent=4)


def load_configurations(filedata, oracle) -> RankedConfigurationSet:
    """
    Load saved configurations and re-rank them with ``oracle``.

    Saved areas are not trusted; every configuration is re-scored.
    """
    load_data = parse_lights_file(filedata)
    _check_version(load_data.get("lightplan_version", "0.0.0"))
    data = load_data.get("data", load_data)
    try:
        entries = data["configurations"]
    except KeyError as e:
        raise ValueError("No configurations found in file") from e
    ranked = RankedConfigurationSet()
    for entry in entries:
        ranked.insert(LightConfiguration.from_dict(entry, oracle))
    return ranked


def load_settings(filedata) -> SearchSettings | None:
    """Return the SearchSettings stored alongside saved configurations, if any."""
    load_data = parse_lights_file(filedata)
    data = load_data.get("data", load_data)
    settings = data.get("settings")
    return SearchSettings.from_dict(settings) if settings is not None else None
