"""Unit tests for yamlref.errors: messages, context attributes and hierarchy."""
from __future__ import annotations

import pytest

from yamlref.errors import (
    CircularReferenceError,
    FileReadError,
    InvalidMarkerError,
    InvalidPatternError,
    MergeTypeError,
    MissingLocationError,
    NoMatchError,
    ParseError,
    PathNotAllowedError,
    ReferencedFileNotFoundError,
    SerializationError,
    YamlRefError,
)
from yamlref.markers.nodes import Reference

ALL_ERRORS = [
    InvalidMarkerError("bad marker"),
    MissingLocationError(Reference("a.yaml")),
    ParseError("/cfg/a.yaml", "bad"),
    ReferencedFileNotFoundError("/cfg/a.yaml"),
    CircularReferenceError("/cfg/a.yaml", ["/cfg/a.yaml"]),
    NoMatchError("*.yaml", "/cfg"),
    PathNotAllowedError("/etc/a.yaml", ["/cfg"]),
    MergeTypeError(0, 1),
    InvalidPatternError("[", "bad range"),
    FileReadError("/cfg/a.yaml", "Permission denied"),
    SerializationError("json", "Out of range float values are not JSON compliant"),
]


class TestHierarchy:
    @pytest.mark.parametrize("error", ALL_ERRORS, ids=lambda e: type(e).__name__)
    def test_all_derive_from_base(self, error: Exception) -> None:
        assert isinstance(error, YamlRefError)

    @pytest.mark.parametrize("error", ALL_ERRORS, ids=lambda e: type(e).__name__)
    def test_all_have_readable_message(self, error: Exception) -> None:
        assert str(error)

    def test_builtin_categories(self) -> None:
        assert isinstance(InvalidMarkerError("x"), ValueError)
        assert isinstance(ReferencedFileNotFoundError("/a"), FileNotFoundError)
        assert isinstance(PathNotAllowedError("/a", []), PermissionError)
        assert isinstance(MergeTypeError(0, None), TypeError)
        assert isinstance(FileReadError("/a", "denied"), OSError)
        assert isinstance(SerializationError("json", "x"), ValueError)


class TestMessages:
    def test_invalid_marker_with_location(self) -> None:
        error = InvalidMarkerError("bad", "/cfg/a.yaml", 3)
        assert str(error) == "bad in /cfg/a.yaml:3"

    def test_parse_error_with_position(self) -> None:
        error = ParseError("/cfg/a.yaml", "oops", 2, 5)
        assert str(error) == "Failed to parse YAML file /cfg/a.yaml:2:5: oops"

    def test_file_not_found_names_referrer(self) -> None:
        error = ReferencedFileNotFoundError("/cfg/b.yaml", "/cfg/a.yaml")
        assert str(error) == "Referenced file not found: /cfg/b.yaml (from /cfg/a.yaml)"

    def test_circular_lists_chain(self) -> None:
        error = CircularReferenceError("/a.yaml", ["/a.yaml", "/b.yaml"])
        assert str(error) == "Circular reference detected: /a.yaml (visited: /a.yaml -> /b.yaml)"
        assert error.chain == ("/a.yaml", "/b.yaml")

    def test_path_not_allowed_lists_roots(self) -> None:
        error = PathNotAllowedError("/etc/a.yaml", ["/cfg", "/shared"])
        assert "/etc/a.yaml is not allowed" in str(error)
        assert "/cfg, /shared" in str(error)

    def test_merge_type_names_index_and_type(self) -> None:
        error = MergeTypeError(2, [1])
        assert "index 2" in str(error)
        assert "list" in str(error)

    def test_file_read_names_path_and_reason(self) -> None:
        error = FileReadError("/cfg/a.yaml", "Permission denied")
        assert str(error) == "Cannot read /cfg/a.yaml: Permission denied"

    def test_serialization_names_format(self) -> None:
        error = SerializationError("json", "bad float")
        assert str(error) == "Cannot serialize document as json: bad float"
        assert error.output_format == "json"

    def test_no_match_names_pattern_and_base(self) -> None:
        error = NoMatchError("conf/*.yaml", "/cfg")
        assert "conf/*.yaml" in str(error)
        assert "/cfg" in str(error)
