"""
Resolves the library links of a compiled contract before submitting it for verification.
"""
import json
import logging
from logging import getLogger
from pathlib import Path
from typing import Any, Dict, Optional

import click
from click import BadParameter, Context

from library_links.constants import LIBRARIES_OPTION
from library_links.contract_information import (
    ContractInformation,
    ContractInformationLoadError,
    get_creation_bytecode,
    get_link_references,
    load_contract_information,
)
from library_links.errors import LibraryLinkError
from library_links.libraries import get_library_links
from library_links.utils.file_ops import load_libraries
from library_links.utils.linking import link_bytecode, unlinked_placeholders
from library_links.utils.type_aliases import Libraries

LOG = getLogger(__name__)

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def validate_contract_information(
    _ctx: Context, _param: Any, value: str
) -> ContractInformation:
    try:
        return load_contract_information(Path(value))
    except ContractInformationLoadError as ex:
        raise BadParameter(str(ex))


def validate_libraries(_ctx: Context, _param: Any, value: Optional[str]) -> Optional[Libraries]:
    if value is None:
        return None
    try:
        return load_libraries(Path(value))
    except ValueError as ex:
        raise BadParameter(str(ex))


@click.group()
def main() -> int:
    pass


@main.command()
@click.option(
    "--contract-info",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    callback=validate_contract_information,
    help="JSON file with the compiled contract and its detected library links.",
)
@click.option(
    LIBRARIES_OPTION,
    "libraries",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    callback=validate_libraries,
    help='JSON file with a {"LibraryName": "0x..."} dictionary. '
    'Fully qualified names like "contracts/Lib.sol:LibraryName" are accepted too.',
)
@click.option(
    "--link/--no-link", default=False, help="Also print the fully linked creation bytecode."
)
@click.option("--log-level", default="INFO", type=click.Choice(LOG_LEVELS))
def resolve(
    contract_info: ContractInformation, libraries: Optional[Libraries], link: bool, log_level: str
) -> None:
    logging.basicConfig(level=getattr(logging, log_level))

    try:
        library_links, undetectable_libraries = get_library_links(
            contract_information=contract_info, libraries=libraries
        )
    except LibraryLinkError as ex:
        raise click.ClickException(str(ex))
    LOG.debug(
        f"Resolved the library links of {contract_info['source_name']}:"
        f"{contract_info['contract_name']}"
    )

    result: Dict[str, Any] = {
        "library_links": library_links,
        "undetectable_libraries": [lib.fqn for lib in undetectable_libraries],
    }
    if link:
        try:
            unlinked_bytecode = get_creation_bytecode(contract_info)
        except ContractInformationLoadError as ex:
            raise click.ClickException(str(ex))
        linked_bytecode = link_bytecode(
            unlinked_bytecode, get_link_references(contract_info), library_links
        )
        remaining = unlinked_placeholders(linked_bytecode)
        if remaining:
            raise click.ClickException(
                f"The linked bytecode still contains placeholders: {', '.join(remaining)}"
            )
        result["bytecode"] = linked_bytecode

    click.echo(json.dumps(result, indent=4))


if __name__ == "__main__":
    # pylint: disable=E1120
    main()
