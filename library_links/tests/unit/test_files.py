import json
import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest

from library_links.contract_information import (
    ContractInformationLoadError,
    get_creation_bytecode,
    get_deployed_link_references,
    get_link_references,
    load_contract_information,
)
from library_links.utils.file_ops import load_json_from_path, load_libraries


def test_load_json_from_corrupt_file() -> None:
    with tempfile.NamedTemporaryFile() as f:
        f.write(b"not a JSON")
        f.flush()
        with pytest.raises(ValueError):
            load_json_from_path(Path(f.name))


def test_load_json_from_missing_file(tmp_path: Path) -> None:
    assert load_json_from_path(tmp_path / "nothing.json") is None


def test_load_libraries(write_libraries_file: Callable[[Any], Path]) -> None:
    libraries = {"LibA": "0x" + "aa" * 20, "contracts/Lib.sol:LibB": "0x" + "bb" * 20}
    assert load_libraries(write_libraries_file(libraries)) == libraries


def test_load_libraries_not_an_object(write_libraries_file: Callable[[Any], Path]) -> None:
    with pytest.raises(ValueError):
        load_libraries(write_libraries_file(["LibA"]))


def test_load_libraries_address_not_a_string(
    write_libraries_file: Callable[[Any], Path]
) -> None:
    with pytest.raises(ValueError, match="LibA"):
        load_libraries(write_libraries_file({"LibA": 16}))


def test_load_libraries_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_libraries(tmp_path / "libraries.json")


def test_load_contract_information(contract_information_file: Path) -> None:
    contract_information = load_contract_information(contract_information_file)
    assert contract_information["contract_name"] == "Foo"
    assert contract_information["library_links"] == {"Foo.sol": {"LibA": "0x" + "aa" * 20}}
    assert list(get_link_references(contract_information)["Foo.sol"]) == ["LibA", "LibB"]
    assert list(get_deployed_link_references(contract_information)["Foo.sol"]) == ["LibA"]
    assert get_creation_bytecode(contract_information).startswith("60")


def test_load_contract_information_without_links(tmp_path: Path) -> None:
    """ Contracts compiled without libraries have no link references at all """
    path = tmp_path / "contract.json"
    path.write_text(
        json.dumps({"source_name": "Foo.sol", "contract_name": "Foo", "contract": {}})
    )
    contract_information = load_contract_information(path)
    assert contract_information["library_links"] == {}
    assert get_link_references(contract_information) == {}
    assert get_deployed_link_references(contract_information) == {}
    with pytest.raises(ContractInformationLoadError):
        get_creation_bytecode(contract_information)


def test_load_contract_information_corrupt(tmp_path: Path) -> None:
    path = tmp_path / "contract.json"
    path.write_text("not a JSON")
    with pytest.raises(ContractInformationLoadError):
        load_contract_information(path)


def test_load_contract_information_unexpected_format(tmp_path: Path) -> None:
    path = tmp_path / "contract.json"
    path.write_text(json.dumps({"contract_name": "Foo"}))
    with pytest.raises(ContractInformationLoadError, match="unexpected format"):
        load_contract_information(path)
    path.write_text(json.dumps(["Foo"]))
    with pytest.raises(ContractInformationLoadError):
        load_contract_information(path)


@pytest.mark.parametrize(
    "content",
    [
        {"source_name": "Foo.sol", "contract_name": "Foo", "contract": None},
        {"source_name": "Foo.sol", "contract_name": "Foo", "contract": {"evm": []}},
        {"source_name": "Foo.sol", "contract_name": "Foo", "contract": {}, "library_links": ["x"]},
        {
            "source_name": "Foo.sol",
            "contract_name": "Foo",
            "contract": {},
            "library_links": {"Foo.sol": "0x"},
        },
    ],
)
def test_load_contract_information_wrong_types(tmp_path: Path, content: Any) -> None:
    """ Compiler output and detected links of the wrong type are refused on load """
    path = tmp_path / "contract.json"
    path.write_text(json.dumps(content))
    with pytest.raises(ContractInformationLoadError):
        load_contract_information(path)
