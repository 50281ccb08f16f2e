"""Tests for path safety, schema flattening, error formatting and middleware."""

import os
from types import SimpleNamespace

import pytest
from pydantic import BaseModel, Field, ValidationError

from mcp_schema import FlatBaseModel, flatten_schema
from xibo_server.middleware.logging import LoggingMiddleware
from xibo_server.middleware.validation_error_sanitizer import (
    ToolInputError,
    ValidationErrorSanitizerMiddleware,
    format_validation_error,
)
from xibo_server.models.layout import EditLayoutRequest
from xibo_server.utils.errors import ErrorCode, format_error
from xibo_server.utils.logging import mask_secrets
from xibo_server.utils.path_utils import (
    PathTraversalError,
    resolve_under_root,
    safe_file_name,
    sanitize_product_name,
)


class TestSafeFileName:
    @pytest.mark.parametrize("name", ["report.md", "レポート.pdf", "a b.png"])
    def test_plain_names_pass(self, name: str) -> None:
        assert safe_file_name(name) == name

    @pytest.mark.parametrize(
        "name", ["", ".", "..", "../x", "a/b", "a\\b", "x\x00.png", "a..b"]
    )
    def test_unsafe_names_raise(self, name: str) -> None:
        with pytest.raises(PathTraversalError):
            safe_file_name(name)


class TestResolveUnderRoot:
    def test_child_resolves(self, tmp_path) -> None:
        (tmp_path / "a.txt").write_text("x")

        resolved = resolve_under_root("a.txt", root=tmp_path, check_exists=True, must_be_file=True)

        assert resolved == (tmp_path / "a.txt").resolve()

    def test_parent_escape_raises(self, tmp_path) -> None:
        with pytest.raises(PathTraversalError):
            resolve_under_root("../outside.txt", root=tmp_path / "root")

    def test_symlink_escape_raises(self, tmp_path) -> None:
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "secret.txt").write_text("secret")
        os.symlink(tmp_path / "secret.txt", root / "link.txt")

        with pytest.raises(PathTraversalError):
            resolve_under_root("link.txt", root=root)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            resolve_under_root("nope.txt", root=tmp_path, check_exists=True)

    def test_directory_is_not_a_file(self, tmp_path) -> None:
        (tmp_path / "sub").mkdir()

        with pytest.raises(ValueError, match="not a file"):
            resolve_under_root("sub", root=tmp_path, must_be_file=True)


class TestSanitizeProductName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Signage Pro", "Signage Pro"),
            ("../etc", "___etc"),
            ("製品-A", "製品-A"),
            ("  padded  ", "padded"),
        ],
    )
    def test_sanitised(self, name: str, expected: str) -> None:
        assert sanitize_product_name(name) == expected

    @pytest.mark.parametrize("name", ["", "   ", "///"])
    def test_empty_result_raises(self, name: str) -> None:
        with pytest.raises(PathTraversalError):
            sanitize_product_name(name)


class Inner(BaseModel):
    size: int = Field(..., description="Size in pixels.")


class Outer(FlatBaseModel):
    name: str = Field(..., description="Name.")
    inner: Inner | None = Field(None, description="Nested value.")
    tags: list[str] = Field(default_factory=list, description="Tags.")


class TestFlattenSchema:
    def test_refs_are_inlined(self) -> None:
        schema = Outer.model_json_schema()

        assert "$defs" not in schema
        assert "title" not in schema
        assert schema["properties"]["inner"]["properties"]["size"]["type"] == "integer"
        assert schema["properties"]["inner"]["nullable"] is True

    def test_optional_fields_are_marked(self) -> None:
        properties = Outer.model_json_schema()["properties"]

        assert properties["name"]["description"] == "Name."
        assert properties["inner"]["description"].startswith("(Optional)")
        assert properties["tags"]["description"] == "(Optional) Tags."
        assert "default" not in properties["tags"]

    def test_missing_ref_becomes_object(self) -> None:
        flat = flatten_schema({"properties": {"x": {"$ref": "#/$defs/Gone"}}, "required": ["x"]})

        assert flat["properties"]["x"] == {"type": "object"}

    def test_recursive_ref_stops(self) -> None:
        schema = {
            "$defs": {
                "Node": {
                    "type": "object",
                    "properties": {"child": {"$ref": "#/$defs/Node"}},
                }
            },
            "$ref": "#/$defs/Node",
        }

        flat = flatten_schema(schema)

        child = flat["properties"]["child"]
        assert child["description"].endswith("(recursive: Node)")


class TestErrors:
    def test_format_error_with_details(self) -> None:
        message = format_error(ErrorCode.HTTP_ERROR, "CMS returned 404", details={"path": "/api/x"})

        assert message == "[HTTP_ERROR] CMS returned 404 (path=/api/x)"

    def test_mask_secrets(self) -> None:
        text = "GET https://fonts.example/webfonts?key=abc123&sort=alpha"

        assert mask_secrets(text) == "GET https://fonts.example/webfonts?key=***&sort=alpha"


class Wrapper(BaseModel):
    request: EditLayoutRequest


def _validation_error() -> ValidationError:
    with pytest.raises(ValidationError) as info:
        Wrapper.model_validate({"request": {"layoutId": "x", "name": "Lobby"}})
    return info.value


def _context(name: str = "edit_layout") -> SimpleNamespace:
    return SimpleNamespace(message=SimpleNamespace(name=name))


class TestMiddleware:
    def test_format_validation_error_strips_request_prefix(self) -> None:
        message = format_validation_error(_validation_error())

        assert message.startswith("[VALIDATION_ERROR] layoutId: ")
        assert "request." not in message
        assert "errors.pydantic.dev" not in message

    @pytest.mark.asyncio
    async def test_sanitizer_raises_tool_input_error(self) -> None:
        error = _validation_error()

        async def call_next(context):
            raise error

        with pytest.raises(ToolInputError, match=r"^\[VALIDATION_ERROR\] layoutId"):
            await ValidationErrorSanitizerMiddleware().on_call_tool(_context(), call_next)

    @pytest.mark.asyncio
    async def test_sanitizer_passes_other_errors(self) -> None:
        async def call_next(context):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await ValidationErrorSanitizerMiddleware().on_call_tool(_context(), call_next)

    @pytest.mark.asyncio
    async def test_logging_returns_result(self) -> None:
        sentinel = object()

        async def call_next(context):
            return sentinel

        assert await LoggingMiddleware().on_call_tool(_context(), call_next) is sentinel
