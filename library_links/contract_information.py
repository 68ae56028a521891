"""ContractInformation describes a compiled contract whose library links are resolved."""
import json
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Dict, List, NamedTuple

from mypy_extensions import TypedDict

from library_links.constants import FQN_SEPARATOR
from library_links.utils.type_aliases import ResolvedLinks

# Classes for static type checking of the compiler output.


LinkReferenceOffset = TypedDict("LinkReferenceOffset", {"start": int, "length": int})

# source name -> library name -> places in the bytecode where the address goes
LinkReferences = Dict[str, Dict[str, List[LinkReferenceOffset]]]

CompilerOutputBytecode = TypedDict(
    "CompilerOutputBytecode", {"object": str, "linkReferences": LinkReferences}, total=False,
)

CompilerOutputEvm = TypedDict(
    "CompilerOutputEvm",
    {"bytecode": CompilerOutputBytecode, "deployedBytecode": CompilerOutputBytecode},
    total=False,
)

CompilerOutputContract = TypedDict(
    "CompilerOutputContract", {"abi": List[Any], "evm": CompilerOutputEvm}, total=False,
)


class ContractInformation(TypedDict):
    source_name: str
    contract_name: str
    contract: CompilerOutputContract
    # Links already detected by comparing against the deployed bytecode
    library_links: ResolvedLinks


class LibraryReference(NamedTuple):
    """One external library used by a contract."""

    source_name: str
    lib_name: str

    @property
    def fqn(self) -> str:
        return f"{self.source_name}{FQN_SEPARATOR}{self.lib_name}"


class Conflict(NamedTuple):
    library: str
    input_address: str
    detected_address: str


class ContractInformationLoadError(RuntimeError):
    """Failure in loading a contract information file."""


def _get_link_references(
    contract_information: ContractInformation, bytecode_kind: str
) -> LinkReferences:
    evm = contract_information["contract"].get("evm", {})
    bytecode = evm.get(bytecode_kind, {})  # type: ignore
    return bytecode.get("linkReferences", {})


def get_link_references(contract_information: ContractInformation) -> LinkReferences:
    """ Returns the link references of the creation bytecode.

    These are all the libraries the contract uses anywhere, including the constructor.
    """
    return _get_link_references(contract_information, "bytecode")


def get_deployed_link_references(contract_information: ContractInformation) -> LinkReferences:
    """ Returns the link references that survive in the deployed bytecode. """
    return _get_link_references(contract_information, "deployedBytecode")


def get_creation_bytecode(contract_information: ContractInformation) -> str:
    evm = contract_information["contract"].get("evm", {})
    try:
        return evm["bytecode"]["object"]
    except KeyError as ex:
        raise ContractInformationLoadError(
            f"The contract {contract_information['contract_name']} has no creation bytecode"
        ) from ex


def load_contract_information(path: Path) -> ContractInformation:
    """ Reads a contract information JSON file

    The file holds "source_name", "contract_name", "contract" (the solc standard JSON
    output for the contract) and, optionally, the already detected "library_links".
    """
    try:
        with path.open() as contract_file:
            content = json.load(contract_file)
    except (JSONDecodeError, UnicodeDecodeError) as ex:
        raise ContractInformationLoadError(f"Can't load contract information: {ex}") from ex
    if not isinstance(content, dict):
        raise ContractInformationLoadError(
            f"Contract information in {path} should be a JSON object."
        )
    try:
        contract_information = ContractInformation(
            source_name=content["source_name"],
            contract_name=content["contract_name"],
            contract=content["contract"],
            library_links=content.get("library_links") or {},
        )
    except KeyError as ex:
        raise ContractInformationLoadError(
            f"Contract information json has unexpected format: {ex}"
        ) from ex

    contract = contract_information["contract"]
    if not isinstance(contract, dict) or not isinstance(contract.get("evm", {}), dict):
        raise ContractInformationLoadError(
            f"Contract information in {path} should hold the compiler output as an object."
        )
    library_links = contract_information["library_links"]
    if not isinstance(library_links, dict) or not all(
        isinstance(libraries, dict) for libraries in library_links.values()
    ):
        raise ContractInformationLoadError(
            f"Detected library links in {path} should be a source name -> library name "
            "-> address object."
        )
    return contract_information


def contract_display_name(
    contract_information: ContractInformation, fully_qualified: bool = False
) -> str:
    if fully_qualified:
        return f"{contract_information['source_name']}:{contract_information['contract_name']}"
    return contract_information["contract_name"]
