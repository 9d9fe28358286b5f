"""Test module for strict_markup_parser package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import strict_markup_parser

    # Assert
    assert strict_markup_parser is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import strict_markup_parser

    # Assert
    assert strict_markup_parser.__version__ == "0.1.0"


def test_package_exports_entry_points() -> None:
    """Test that the public API is reachable from the package root."""
    # Arrange & Act
    import strict_markup_parser

    # Assert
    for name in ("parse_document", "parse", "parse_string", "parse_file",
                 "make_text", "make_element", "TagMismatchError"):
        assert name in strict_markup_parser.__all__
        assert hasattr(strict_markup_parser, name)


def test_top_level_parse_document() -> None:
    """Test the documented sibling-roots example through the package root."""
    # Arrange
    from strict_markup_parser import make_element, parse_document

    # Act
    root = parse_document("<a></a><b></b>")

    # Assert
    assert root == make_element(
        "html", {}, [make_element("a", {}, []), make_element("b", {}, [])]
    )
