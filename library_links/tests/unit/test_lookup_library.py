import pytest

from library_links.contract_information import LibraryReference
from library_links.errors import AmbiguousLibraryNameError, LibraryNotFoundError
from library_links.libraries import lookup_library

FOO_LIB_A = LibraryReference("Foo.sol", "LibA")
BAR_LIB_A = LibraryReference("Bar.sol", "LibA")
FOO_LIB_B = LibraryReference("Foo.sol", "LibB")


def test_lookup_by_short_name() -> None:
    assert (
        lookup_library(
            all_libraries=[FOO_LIB_A, FOO_LIB_B],
            detectable_libraries=[FOO_LIB_A],
            undetectable_libraries=[FOO_LIB_B],
            linked_library_name="LibB",
            contract_name="Foo",
        )
        == FOO_LIB_B
    )


def test_lookup_by_fully_qualified_name() -> None:
    """ A fully qualified name picks one of several libraries sharing a short name """
    assert (
        lookup_library(
            all_libraries=[FOO_LIB_A, BAR_LIB_A],
            detectable_libraries=[],
            undetectable_libraries=[FOO_LIB_A, BAR_LIB_A],
            linked_library_name="Bar.sol:LibA",
            contract_name="Foo",
        )
        == BAR_LIB_A
    )


def test_lookup_ambiguous_short_name() -> None:
    with pytest.raises(AmbiguousLibraryNameError) as excinfo:
        lookup_library(
            all_libraries=[FOO_LIB_A, BAR_LIB_A],
            detectable_libraries=[],
            undetectable_libraries=[FOO_LIB_A, BAR_LIB_A],
            linked_library_name="LibA",
            contract_name="Foo",
        )
    message = str(excinfo.value)
    assert "The library name LibA is ambiguous for the contract Foo" in message
    assert "  * Foo.sol:LibA\n  * Bar.sol:LibA" in message
    assert "fully qualified library names" in message
    assert excinfo.value.matches == [FOO_LIB_A, BAR_LIB_A]


def test_lookup_unknown_library_lists_contract_libraries() -> None:
    """ The not found message marks the autodetected libraries as optional """
    with pytest.raises(LibraryNotFoundError) as excinfo:
        lookup_library(
            all_libraries=[FOO_LIB_A, FOO_LIB_B],
            detectable_libraries=[FOO_LIB_A],
            undetectable_libraries=[FOO_LIB_B],
            linked_library_name="LibC",
            contract_name="Foo",
        )
    message = str(excinfo.value)
    assert "You gave a link for the library LibC" in message
    assert "not one of the libraries of contract Foo" in message
    assert "  * Foo.sol:LibB\n  * Foo.sol:LibA (optional)" in message
    assert excinfo.value.library_name == "LibC"


def test_lookup_in_contract_without_libraries() -> None:
    with pytest.raises(LibraryNotFoundError) as excinfo:
        lookup_library(
            all_libraries=[],
            detectable_libraries=[],
            undetectable_libraries=[],
            linked_library_name="LibA",
            contract_name="Foo",
        )
    assert "This contract doesn't use any external libraries." in str(excinfo.value)


def test_lookup_does_not_match_partial_names() -> None:
    with pytest.raises(LibraryNotFoundError):
        lookup_library(
            all_libraries=[FOO_LIB_A],
            detectable_libraries=[],
            undetectable_libraries=[FOO_LIB_A],
            linked_library_name="Foo.sol",
            contract_name="Foo",
        )
