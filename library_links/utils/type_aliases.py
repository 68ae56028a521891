from typing import Dict, NewType

from eth_typing import HexAddress

T_SourceName = str
SourceName = NewType("SourceName", T_SourceName)

T_LibraryName = str
LibraryName = NewType("LibraryName", T_LibraryName)

# source name -> library name -> address
ResolvedLinks = Dict[SourceName, Dict[LibraryName, HexAddress]]

# Library name (short or fully qualified) -> address, as given by the user
Libraries = Dict[str, str]
