"""Test module for dom_analyzer package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import dom_analyzer

    # Assert
    assert dom_analyzer is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import dom_analyzer

    # Assert
    assert isinstance(dom_analyzer.__version__, str)
    assert dom_analyzer.__version__ == "0.1.0"


def test_package_exports_resolve() -> None:
    """Test that every name in __all__ is importable from the package."""
    # Arrange & Act
    import dom_analyzer

    # Assert
    for name in dom_analyzer.__all__:
        assert hasattr(dom_analyzer, name), name


def test_level_one_functions_work_together() -> None:
    """Test parse_markup and render_tree from the top-level namespace."""
    # Arrange
    from dom_analyzer import parse_markup, render_tree

    # Act
    units = render_tree(parse_markup("<p>x</p>"))

    # Assert
    assert units[0].tag_name == "p"
