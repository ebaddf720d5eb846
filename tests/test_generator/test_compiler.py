"""Tests for specgen.generator.compiler."""

from __future__ import annotations

import textwrap
from typing import Any

import pytest

from specgen.config import merge_default_params
from specgen.exceptions import CompileError
from specgen.generator.compiler import compile_path
from specgen.models import GenConfig


def _code(text: str) -> str:
    return textwrap.dedent(text).strip("\n")


def _config(paths: dict[str, Any], lang: str = "ts", **extra: Any) -> GenConfig:
    source = {
        "swagger": "2.0",
        "paths": paths,
        "definitions": {"Pet": {"type": "object", "properties": {"name": {"type": "string"}}}},
    }
    return merge_default_params({"source": source, "lang": lang, **extra})


# ---------------------------------------------------------------------------
# TypeScript output
# ---------------------------------------------------------------------------


class TestCompileTs:
    def test_query_parameters(self, ts_config: GenConfig) -> None:
        fragment = compile_path(ts_config, "/pets", "get")
        assert fragment.name == "getPets"
        assert fragment.imports == ["Pet"]
        assert fragment.js_doc_code == ""
        assert fragment.code.strip("\n") == _code("""
            // List pets
            export const getPets = (params?: { limit?: number; status?: ("available" | "sold")[] }) =>
              axios.request<Pet[]>({
                url: `/pets`,
                method: "get",
                params,
              });
        """)

    def test_path_parameter_from_path_item(self, ts_config: GenConfig) -> None:
        fragment = compile_path(ts_config, "/pets/{id}", "delete")
        assert fragment.name == "deletePetsId"
        assert fragment.imports == []
        assert fragment.code.strip("\n") == _code("""
            // Deletes a pet
            /** @deprecated */
            export const deletePetsId = (pathParams: { id: number }) =>
              axios.request<any>({
                url: `/pets/${pathParams.id}`,
                method: "delete",
              });
        """)

    def test_header_parameters_not_in_signature(self, ts_config: GenConfig) -> None:
        fragment = compile_path(ts_config, "/pets/{id}", "delete")
        assert "api_key" not in fragment.code

    def test_body_parameter_typed_by_schema(self, ts_config: GenConfig) -> None:
        fragment = compile_path(ts_config, "/pets", "post")
        assert "export const postPets = (data: Pet) =>" in fragment.code
        assert "    data,\n" in fragment.code
        assert fragment.imports == ["Pet"]

    def test_form_data_and_normalized_response(self, ts_config: GenConfig) -> None:
        fragment = compile_path(ts_config, "/pets/{id}/photo", "post")
        assert (
            "export const postPetsIdPhoto = "
            "(pathParams: { id: number }, data: { file: Blob; additionalMetadata?: string }) =>"
        ) in fragment.code
        assert "axios.request<ApiApiResponse>({" in fragment.code
        assert fragment.imports == ["ApiApiResponse"]

    def test_file_response_requests_blob(self, ts_config: GenConfig) -> None:
        fragment = compile_path(ts_config, "/pets/{id}/photo", "get")
        # The placeholder is not declared, so it falls back to a string.
        assert "(pathParams: { id: string })" in fragment.code
        assert "axios.request<Blob>({" in fragment.code
        assert 'responseType: "blob",' in fragment.code

    def test_map_response(self, ts_config: GenConfig) -> None:
        fragment = compile_path(ts_config, "/store/inventory", "get")
        assert "export const getStoreInventory = () =>" in fragment.code
        assert "axios.request<Record<string, number>>({" in fragment.code

    def test_method_is_case_insensitive(self, ts_config: GenConfig) -> None:
        assert compile_path(ts_config, "/pets", "GET").name == "getPets"


class TestArgumentOptionality:
    def test_optional_group_before_required_becomes_required(self) -> None:
        config = _config(
            {
                "/pets/{id}": {
                    "put": {
                        "parameters": [
                            {"name": "id", "in": "path", "required": True, "type": "string"},
                            {"name": "dryRun", "in": "query", "type": "boolean"},
                            {"name": "body", "in": "body", "required": True, "schema": {"$ref": "#/definitions/Pet"}},
                        ]
                    }
                }
            }
        )
        fragment = compile_path(config, "/pets/{id}", "put")
        assert "(pathParams: { id: string }, params: { dryRun?: boolean }, data: Pet)" in fragment.code

    def test_trailing_optional_body(self) -> None:
        config = _config(
            {
                "/search": {
                    "post": {
                        "parameters": [
                            {"name": "q", "in": "query", "required": True, "type": "string"},
                            {"name": "body", "in": "body", "schema": {"type": "object"}},
                        ]
                    }
                }
            }
        )
        fragment = compile_path(config, "/search", "post")
        assert "(params: { q: string }, data?: Record<string, any>)" in fragment.code

    def test_operation_overrides_path_level_parameter(self) -> None:
        config = _config(
            {
                "/pets/{id}": {
                    "parameters": [{"name": "id", "in": "path", "required": True, "type": "string"}],
                    "get": {"parameters": [{"name": "id", "in": "path", "required": True, "type": "integer"}]},
                }
            }
        )
        fragment = compile_path(config, "/pets/{id}", "get")
        assert "(pathParams: { id: number })" in fragment.code

    def test_parameter_ref_resolved(self) -> None:
        config = merge_default_params(
            {
                "source": {
                    "swagger": "2.0",
                    "parameters": {"limit": {"name": "limit", "in": "query", "type": "integer"}},
                    "paths": {"/pets": {"get": {"parameters": [{"$ref": "#/parameters/limit"}]}}},
                },
                "lang": "ts",
            }
        )
        fragment = compile_path(config, "/pets", "get")
        assert "(params?: { limit?: number })" in fragment.code


# ---------------------------------------------------------------------------
# JavaScript output
# ---------------------------------------------------------------------------


class TestCompileJs:
    def test_js_doc_block(self, js_config: GenConfig) -> None:
        fragment = compile_path(js_config, "/pets", "get")
        assert fragment.js_doc_code.strip("\n") == _code("""
            /**
             * List pets
             * @param {Object} [params]
             * @param {number} [params.limit] - How many items
             * @param {Array<("available"|"sold")>} [params.status]
             * @return {Promise<Array<Pet>>}
             */
        """)
        assert fragment.code.strip("\n") == _code("""
            export const getPets = (params) =>
              axios.request({
                url: `/pets`,
                method: "get",
                params,
              });
        """)
        assert fragment.imports == ["Pet"]

    def test_body_param_documented(self, js_config: GenConfig) -> None:
        fragment = compile_path(js_config, "/pets", "post")
        assert " * @param {Pet} data - Pet to add\n" in fragment.js_doc_code

    def test_deprecated_tag(self, js_config: GenConfig) -> None:
        fragment = compile_path(js_config, "/pets/{id}", "delete")
        assert " * @deprecated\n" in fragment.js_doc_code
        assert " * @param {number} pathParams.id\n" in fragment.js_doc_code

    def test_without_js_doc_summary_becomes_comment(self, js_config: GenConfig) -> None:
        config = js_config.model_copy(update={"js_doc": False})
        fragment = compile_path(config, "/pets", "get")
        assert fragment.js_doc_code == ""
        assert fragment.code.startswith("// List pets\n")


# ---------------------------------------------------------------------------
# Inline declarations
# ---------------------------------------------------------------------------


class TestInlineDeclarations:
    def test_interface_prepended(self, ts_config: GenConfig) -> None:
        config = ts_config.model_copy(update={"interface": True})
        fragment = compile_path(config, "/pets", "post")
        assert fragment.code.startswith("export interface Pet {")
        assert "export interface Category" not in fragment.code

    def test_recursive_follows_references(self, ts_config: GenConfig) -> None:
        config = ts_config.model_copy(update={"interface": True, "recursive": True})
        fragment = compile_path(config, "/pets", "post")
        assert "export interface Category {" in fragment.code

    def test_typedef_prepended_for_js(self, js_config: GenConfig) -> None:
        config = js_config.model_copy(update={"typedef": True})
        fragment = compile_path(config, "/pets", "post")
        assert " * @typedef {Object} Pet\n" in fragment.code


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestCompileErrors:
    def test_unknown_operation(self, ts_config: GenConfig) -> None:
        with pytest.raises(CompileError, match="Operation not found") as exc_info:
            compile_path(ts_config, "/nope", "get")
        assert exc_info.value.url == "/nope"

    def test_unknown_definition(self) -> None:
        config = _config(
            {"/x": {"get": {"responses": {"200": {"schema": {"$ref": "#/definitions/Missing"}}}}}}
        )
        with pytest.raises(CompileError, match="Unresolved definition") as exc_info:
            compile_path(config, "/x", "get")
        assert exc_info.value.method == "get"
        assert "GET /x" in str(exc_info.value)

    def test_malformed_parameter(self) -> None:
        config = _config({"/x": {"get": {"parameters": [{"name": "q"}]}}})
        with pytest.raises(CompileError, match="Malformed parameter"):
            compile_path(config, "/x", "get")

    def test_unresolvable_parameter_ref(self) -> None:
        config = _config({"/x": {"get": {"parameters": [{"$ref": "#/parameters/missing"}]}}})
        with pytest.raises(CompileError, match="Cannot resolve"):
            compile_path(config, "/x", "get")
