import re
from typing import List

from eth_utils import remove_0x_prefix

from library_links.constants import (
    LIBRARY_ADDRESS_LENGTH,
    LIBRARY_PLACEHOLDER_KEY_LENGTH,
    LIBRARY_PLACEHOLDER_PREFIX,
    LIBRARY_PLACEHOLDER_SUFFIX,
)
from library_links.contract_information import LibraryReference, LinkReferences
from library_links.utils.type_aliases import ResolvedLinks

PLACEHOLDER_RE = re.compile(
    re.escape(LIBRARY_PLACEHOLDER_PREFIX)
    + f"[0-9a-fA-F]{{{LIBRARY_PLACEHOLDER_KEY_LENGTH}}}"
    + re.escape(LIBRARY_PLACEHOLDER_SUFFIX)
)


def unlinked_placeholders(bytecode: str) -> List[str]:
    """Returns the library placeholders still present in the bytecode."""
    return PLACEHOLDER_RE.findall(bytecode)


def link_bytecode(
    unlinked_bytecode: str, link_references: LinkReferences, library_links: ResolvedLinks
) -> str:
    """Links compiled bytecode by writing the library addresses at the offsets
    given by the compiler's link references."""

    prefix = "0x" if unlinked_bytecode.startswith("0x") else ""
    linked_bytecode = remove_0x_prefix(unlinked_bytecode)  # type: ignore
    for source_name, libraries in link_references.items():
        for lib_name, offsets in libraries.items():
            library = LibraryReference(source_name, lib_name)
            try:
                library_address = library_links[source_name][lib_name]  # type: ignore
            except KeyError:
                raise KeyError(f"No address for the library {library.fqn}")
            normalized_address = remove_0x_prefix(library_address).lower()  # type: ignore
            for offset in offsets:
                if offset["length"] != LIBRARY_ADDRESS_LENGTH:
                    raise ValueError(
                        f"Unexpected link reference length {offset['length']} "
                        f"for the library {library.fqn}"
                    )
                start = 2 * offset["start"]
                end = start + 2 * offset["length"]
                linked_bytecode = (
                    linked_bytecode[:start] + normalized_address + linked_bytecode[end:]
                )
    return prefix + linked_bytecode
