"""Basic package tests to verify installation."""


def test_package_imports() -> None:
    """Verify the main package can be imported."""
    import gridframe

    assert gridframe.__version__


def test_config_module_imports() -> None:
    """Verify config module structure is correct."""
    from gridframe.config import (
        ColumnRolesConfig,
        DecodingConfig,
        IngestionConfig,
        SourceConfig,
        load_config,
    )

    assert ColumnRolesConfig is not None
    assert DecodingConfig is not None
    assert IngestionConfig is not None
    assert SourceConfig is not None
    assert load_config is not None


def test_ingestion_module_imports() -> None:
    """Verify ingestion exports are available."""
    from gridframe.ingestion import (
        FLOAT,
        CSVFile,
        read_from,
        read_from_columns,
        read_from_indices,
        resolve_by_index,
        resolve_by_name,
    )

    assert FLOAT.name == "float"
    assert CSVFile is not None
    assert read_from is not None
    assert read_from_columns is not None
    assert read_from_indices is not None
    assert resolve_by_index is not None
    assert resolve_by_name is not None


def test_errors_are_builtin_subclasses() -> None:
    """Gridframe errors can be caught as the matching builtin exceptions."""
    from gridframe.errors import FieldLookupError, ParseError, RangeError, SchemaError

    assert issubclass(SchemaError, ValueError)
    assert issubclass(ParseError, ValueError)
    assert issubclass(RangeError, IndexError)
    assert issubclass(FieldLookupError, LookupError)
