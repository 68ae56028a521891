"""Failures raised while resolving the library links of a contract.

Every error carries a message meant for the user. It names the contract,
the libraries and the addresses involved so that the library input can be
fixed without looking at the sources.
"""
from typing import List, Sequence

from library_links.constants import OPTIONAL_LIBRARY_MARKER
from library_links.contract_information import Conflict, LibraryReference


def format_library_list(libraries: Sequence[LibraryReference], suffix: str = "") -> str:
    return "\n".join(f"  * {lib.fqn}{suffix}" for lib in libraries)


class LibraryLinkError(RuntimeError):
    """Base class of all library link resolution failures."""


class InvalidAddressError(LibraryLinkError, ValueError):
    def __init__(self, contract_name: str, library_name: str, address: str) -> None:
        super().__init__(
            f"You gave a link for the contract {contract_name} with the library "
            f"{library_name}, but provided this invalid address: {address}"
        )
        self.contract_name = contract_name
        self.library_name = library_name
        self.address = address


class LibraryNotFoundError(LibraryLinkError):
    def __init__(
        self,
        library_name: str,
        contract_name: str,
        detectable_libraries: Sequence[LibraryReference],
        undetectable_libraries: Sequence[LibraryReference],
    ) -> None:
        if detectable_libraries or undetectable_libraries:
            detailed_message = (
                "This contract uses the following external libraries:\n"
                f"{format_library_list(undetectable_libraries)}\n"
                f"{format_library_list(detectable_libraries, OPTIONAL_LIBRARY_MARKER)}"
            )
        else:
            detailed_message = "This contract doesn't use any external libraries."
        super().__init__(
            f"You gave a link for the library {library_name}, which is not one of the "
            f"libraries of contract {contract_name}.\n"
            f"{detailed_message}\n"
            "Libraries marked as optional don't need to be specified since they are "
            "autodetected."
        )
        self.library_name = library_name
        self.contract_name = contract_name


class AmbiguousLibraryNameError(LibraryLinkError):
    def __init__(
        self, library_name: str, contract_name: str, matches: Sequence[LibraryReference]
    ) -> None:
        super().__init__(
            f"The library name {library_name} is ambiguous for the contract {contract_name}.\n"
            "It may resolve to one of the following libraries:\n"
            f"{format_library_list(matches)}\n\n"
            "To fix this, choose one of these fully qualified library names and replace "
            "where appropriate."
        )
        self.library_name = library_name
        self.contract_name = contract_name
        self.matches: List[LibraryReference] = list(matches)


class DuplicateLibraryLinkError(LibraryLinkError):
    def __init__(self, library: LibraryReference) -> None:
        super().__init__(
            f"The library names {library.lib_name} and {library.fqn} refer to the same "
            "library and were given as two separate library links.\n"
            "Remove one of them and review your library links before proceeding."
        )
        self.library = library


class AddressConflictError(LibraryLinkError):
    def __init__(self, conflicts: Sequence[Conflict]) -> None:
        descriptions = "\n".join(
            f"  * {conflict.library}\n"
            f"    given address: {conflict.input_address}\n"
            f"    detected address: {conflict.detected_address}"
            for conflict in conflicts
        )
        super().__init__(
            "The following libraries were detected with a different address than the "
            f"one provided:\n{descriptions}"
        )
        self.conflicts: List[Conflict] = list(conflicts)


class MissingLibrariesError(LibraryLinkError):
    def __init__(self, message: str, missing: Sequence[LibraryReference]) -> None:
        super().__init__(message)
        self.missing: List[LibraryReference] = list(missing)
