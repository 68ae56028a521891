# Command line option through which users pass their library addresses
LIBRARIES_OPTION = "--libraries"

FQN_SEPARATOR = ":"

# solc >= 0.5 placeholder: "__$" + 34 hex chars of keccak(fully qualified name) + "$__"
LIBRARY_PLACEHOLDER_PREFIX = "__$"
LIBRARY_PLACEHOLDER_SUFFIX = "$__"
LIBRARY_PLACEHOLDER_KEY_LENGTH = 34

# An address takes 20 bytes in the bytecode
LIBRARY_ADDRESS_LENGTH = 20

OPTIONAL_LIBRARY_MARKER = " (optional)"

MISSING_LIBRARIES_GUIDE = f"""

To solve this, you can create a JSON file that contains a library dictionary and pass it \
through the {LIBRARIES_OPTION} parameter:

library-links resolve {LIBRARIES_OPTION} libraries.json <other args>

where libraries.json looks like this:

{{
  "SomeLibrary": "0x..."
}}

If you are calling get_library_links() directly, then you may pass the libraries \
parameter with such a dictionary:

get_library_links(
  <other args>
  libraries={{
    "SomeLibrary": "0x...",
  }},
)"""

MISSING_LIBRARIES_NOTE = f"""

To solve this, you can add them to your {LIBRARIES_OPTION} dictionary with their \
corresponding addresses."""
