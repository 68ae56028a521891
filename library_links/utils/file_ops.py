import json
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Dict, Optional

from library_links.utils.type_aliases import Libraries


def load_json_from_path(f: Path) -> Optional[Dict[str, Any]]:
    try:
        with f.open() as json_file:
            return json.load(json_file)
    except FileNotFoundError:
        return None
    except (JSONDecodeError, UnicodeDecodeError) as ex:
        raise ValueError(f"JSON file {f} is corrupted: {ex}") from ex


def load_libraries(path: Path) -> Libraries:
    """ Loads the library name -> address dictionary given through --libraries """
    libraries = load_json_from_path(path)
    if libraries is None:
        raise FileNotFoundError(f"Libraries file {path} not found")
    if not isinstance(libraries, dict):
        raise ValueError(f"Libraries file {path} should contain a JSON object.")
    for name, address in libraries.items():
        if not isinstance(address, str):
            raise ValueError(
                f"The address of the library {name} in {path} should be a string, "
                f"got {address!r}"
            )
    return libraries
