from library_links.contract_information import ContractInformation, LibraryReference
from library_links.errors import (
    AddressConflictError,
    AmbiguousLibraryNameError,
    DuplicateLibraryLinkError,
    InvalidAddressError,
    LibraryLinkError,
    LibraryNotFoundError,
    MissingLibrariesError,
)
from library_links.libraries import LibraryLinks, get_library_links

__all__ = [
    "AddressConflictError",
    "AmbiguousLibraryNameError",
    "ContractInformation",
    "DuplicateLibraryLinkError",
    "InvalidAddressError",
    "LibraryLinkError",
    "LibraryLinks",
    "LibraryNotFoundError",
    "LibraryReference",
    "MissingLibrariesError",
    "get_library_links",
]
