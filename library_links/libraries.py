"""Resolution of the library links needed to reproduce the bytecode of a contract.

Libraries called from the deployed code can be detected by comparing the compiled
bytecode against the one on chain. Libraries only called in the constructor leave no
trace there, so their addresses have to be given by the user. This module combines
both sources and complains when the result is contradictory or incomplete.
"""
from logging import getLogger
from typing import Any, Callable, List, Mapping, NamedTuple, Optional, Set

from library_links.constants import MISSING_LIBRARIES_GUIDE, MISSING_LIBRARIES_NOTE
from library_links.contract_information import (
    Conflict,
    ContractInformation,
    LibraryReference,
    contract_display_name,
    get_deployed_link_references,
    get_link_references,
)
from library_links.errors import (
    AddressConflictError,
    AmbiguousLibraryNameError,
    DuplicateLibraryLinkError,
    InvalidAddressError,
    LibraryNotFoundError,
    MissingLibrariesError,
    format_library_list,
)
from library_links.utils.type_aliases import Libraries, ResolvedLinks

LOG = getLogger(__name__)

AddressValidator = Callable[[Any], bool]


def is_address_string(value: Any) -> bool:
    """ Accepts hex address strings only, unlike eth_utils.is_address which takes bytes too """
    # Import locally so that the validator only gets loaded when libraries are given
    from eth_utils import is_address, is_text

    return is_text(value) and is_address(value)


class LibraryLinks(NamedTuple):
    library_links: ResolvedLinks
    undetectable_libraries: List[LibraryReference]


def get_library_names(libraries: Mapping[str, Mapping[str, Any]]) -> List[LibraryReference]:
    """ Flattens a source name -> library name -> anything mapping into references """
    return [
        LibraryReference(source_name=source_name, lib_name=lib_name)
        for source_name, source_libraries in libraries.items()
        for lib_name in source_libraries.keys()
    ]


def get_library_links(
    contract_information: ContractInformation,
    libraries: Optional[Libraries] = None,
    address_validator: Optional[AddressValidator] = None,
) -> LibraryLinks:
    """ Returns the complete library links of a contract

    Args:
        contract_information: the compiled contract together with the library links
            already detected from its deployed bytecode
        libraries: library name (short or fully qualified) -> address, given by the user
        address_validator: predicate accepting well formed addresses,
            is_address_string by default

    Raises:
        LibraryLinkError: when the user input is wrong, contradicts the detected links or
            some library is still missing an address.
    """
    all_libraries = get_library_names(get_link_references(contract_information))
    detectable_libraries = get_library_names(get_deployed_link_references(contract_information))
    detectable_set = set(detectable_libraries)
    undetectable_libraries = [lib for lib in all_libraries if lib not in detectable_set]
    LOG.debug(
        f"{contract_display_name(contract_information)} uses {len(all_libraries)} libraries, "
        f"{len(undetectable_libraries)} of them undetectable"
    )

    merged_library_links = contract_information["library_links"]
    if libraries is not None:
        normalized_libraries = normalize_libraries(
            all_libraries=all_libraries,
            detectable_libraries=detectable_libraries,
            undetectable_libraries=undetectable_libraries,
            libraries=libraries,
            contract_name=contract_information["contract_name"],
            address_validator=address_validator,
        )
        merged_library_links = merge_libraries(
            normalized_libraries, contract_information["library_links"]
        )

    merged_libraries = set(get_library_names(merged_library_links))
    missing_libraries = [lib for lib in all_libraries if lib not in merged_libraries]
    if missing_libraries:
        message = (
            f"The contract {contract_display_name(contract_information, fully_qualified=True)} "
            "has one or more library references that cannot be detected from deployed "
            "bytecode.\n"
            "This can occur if the library is only called in the contract constructor. "
            "The missing libraries are:\n"
            f"{format_library_list(missing_libraries)}"
        )
        # Nothing given by the user covered any of the undetectable libraries
        if len(missing_libraries) == len(undetectable_libraries):
            message += MISSING_LIBRARIES_GUIDE
        else:
            message += MISSING_LIBRARIES_NOTE
        raise MissingLibrariesError(message, missing_libraries)

    return LibraryLinks(
        library_links=merged_library_links, undetectable_libraries=undetectable_libraries
    )


def merge_libraries(
    normalized_libraries: ResolvedLinks, detected_libraries: ResolvedLinks
) -> ResolvedLinks:
    """ Merges the links given by the user with the detected ones

    Both inputs are left untouched. Where both sides agree on an address, the user's
    spelling of it is kept.
    """
    conflicts = []
    for source_name, libraries in normalized_libraries.items():
        for lib_name, lib_address in libraries.items():
            detected_address = detected_libraries.get(source_name, {}).get(lib_name)
            if detected_address is None:
                continue
            # Detected addresses are always lowercase hex.
            if lib_address.lower() != detected_address:
                conflicts.append(
                    Conflict(
                        library=LibraryReference(source_name, lib_name).fqn,
                        input_address=lib_address,
                        detected_address=detected_address,
                    )
                )

    if conflicts:
        raise AddressConflictError(conflicts)

    merged_libraries: ResolvedLinks = {}
    _add_libraries(merged_libraries, normalized_libraries)
    _add_libraries(merged_libraries, detected_libraries, overwrite=False)
    LOG.debug(f"Merged library links: {merged_libraries}")
    return merged_libraries


def _add_libraries(
    target_libraries: ResolvedLinks, new_libraries: ResolvedLinks, overwrite: bool = True
) -> None:
    for source_name, libraries in new_libraries.items():
        target = target_libraries.setdefault(source_name, {})
        for lib_name, lib_address in libraries.items():
            if overwrite or lib_name not in target:
                target[lib_name] = lib_address


def normalize_libraries(
    all_libraries: List[LibraryReference],
    detectable_libraries: List[LibraryReference],
    undetectable_libraries: List[LibraryReference],
    libraries: Libraries,
    contract_name: str,
    address_validator: Optional[AddressValidator] = None,
) -> ResolvedLinks:
    """ Resolves the library names given by the user into source name -> library name """
    if address_validator is None:
        address_validator = is_address_string

    library_fqns: Set[str] = set()
    normalized_libraries: ResolvedLinks = {}
    for linked_library_name, linked_library_address in libraries.items():
        if not address_validator(linked_library_address):
            raise InvalidAddressError(
                contract_name=contract_name,
                library_name=linked_library_name,
                address=linked_library_address,
            )

        needed_library = lookup_library(
            all_libraries=all_libraries,
            detectable_libraries=detectable_libraries,
            undetectable_libraries=undetectable_libraries,
            linked_library_name=linked_library_name,
            contract_name=contract_name,
        )

        # The same library can only show up twice if it was given once by its
        # name and once by its fully qualified name.
        if needed_library.fqn in library_fqns:
            raise DuplicateLibraryLinkError(needed_library)

        library_fqns.add(needed_library.fqn)
        normalized_libraries.setdefault(needed_library.source_name, {})[
            needed_library.lib_name
        ] = linked_library_address
        LOG.debug(f"Library {linked_library_name} resolved to {needed_library.fqn}")

    return normalized_libraries


def lookup_library(
    all_libraries: List[LibraryReference],
    detectable_libraries: List[LibraryReference],
    undetectable_libraries: List[LibraryReference],
    linked_library_name: str,
    contract_name: str,
) -> LibraryReference:
    """ Finds the only library that a short or fully qualified name refers to """
    matching_libraries = [
        lib
        for lib in all_libraries
        if linked_library_name in (lib.lib_name, lib.fqn)
    ]

    if not matching_libraries:
        raise LibraryNotFoundError(
            library_name=linked_library_name,
            contract_name=contract_name,
            detectable_libraries=detectable_libraries,
            undetectable_libraries=undetectable_libraries,
        )

    if len(matching_libraries) > 1:
        raise AmbiguousLibraryNameError(
            library_name=linked_library_name,
            contract_name=contract_name,
            matches=matching_libraries,
        )

    return matching_libraries[0]
