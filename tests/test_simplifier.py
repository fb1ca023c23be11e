import json
from pathlib import Path

import pytest

from openapi_slim.config import RefPolicy, SimplifierConfig
from openapi_slim.errors import FormatError
from openapi_slim.parser.structured import YamlParser
from openapi_slim.simplifier import compact_document, reduction_percent, simplify

FIXTURES = Path(__file__).parent / "fixtures"

PETS_DOC = (
    '{"openapi":"3.0.0","paths":{"/pets":{"get":{"summary":"List all pets","parameters":'
    '[{"name":"limit","in":"query","required":false,"schema":{"type":"integer","format":"int32"}}],'
    '"responses":{"200":{"content":{"application/json":{"schema":{"$ref":"#/components/schemas/Pets"}}}}}}}},'
    '"components":{"schemas":{"Pets":{"type":"array","items":{"$ref":"#/components/schemas/Pet"}},'
    '"Pet":{"type":"object","required":["id"],"properties":{"id":{"type":"integer"}}}}}}'
)


class TestSimplify:
    def test_pets_scenario_direct_policy(self):
        result = simplify(PETS_DOC)
        assert result.output == (
            '{"endpoints":[{"m":"get","p":"/pets","desc":"List all pets","qp":["limit:integer?(int32)"],'
            '"res":"Pets","codes":[200]}],"schemas":{"Pets":{"type":"array","items":{"$ref":"Pet"}}}}'
        )

    def test_pets_scenario_transitive_policy(self):
        result = simplify(PETS_DOC, config=SimplifierConfig(ref_policy=RefPolicy.TRANSITIVE))
        schemas = json.loads(result.output)["schemas"]
        assert list(schemas) == ["Pets", "Pet"]
        assert schemas["Pet"] == {"type": "object", "required": ["id"], "properties": {"integer id": True}}

    def test_empty_input(self):
        result = simplify("")
        assert result.output == ""
        assert result.reduction is None

    def test_whitespace_input(self):
        result = simplify("   \n")
        assert result.output == ""
        assert result.input_length == 4

    def test_malformed_input(self):
        with pytest.raises(FormatError) as exc_info:
            simplify("{ not json", YamlParser())
        assert str(exc_info.value)

    def test_repeatable(self):
        text = (FIXTURES / "petstore.yaml").read_text(encoding="utf-8")
        assert simplify(text, YamlParser()).output == simplify(text, YamlParser()).output

    def test_reduction_reported(self):
        result = simplify(PETS_DOC)
        assert result.input_length == len(PETS_DOC)
        assert result.output_length == len(result.output)
        assert result.reduction == reduction_percent(len(PETS_DOC), len(result.output))
        assert 0 < result.reduction < 100

    def test_minimal_serialization(self):
        output = simplify(PETS_DOC).output
        assert "\n" not in output
        assert ", " not in output
        assert '": ' not in output

    def test_yaml_alias_cycle_under_paths(self):
        text = (
            "paths:\n"
            "  /a:\n"
            "    get:\n"
            "      responses:\n"
            "        '200': &r {description: ok, links: [*r]}\n"
            "components:\n"
            "  schemas:\n"
            "    Error: {type: object}\n"
        )
        result = json.loads(simplify(text, YamlParser()).output)
        assert result["endpoints"] == [{"m": "get", "p": "/a", "codes": [200]}]
        assert result["schemas"] == {"Error": "object"}

    def test_yaml_alias_cycle_in_schema(self):
        text = (
            "paths: {}\n"
            "components:\n"
            "  schemas:\n"
            "    Error: &e {type: object, properties: {cause: *e}}\n"
        )
        result = json.loads(simplify(text, YamlParser()).output)
        assert result["schemas"] == {"Error": {"type": "object", "properties": {"cause": {}}}}

    def test_uncompactable_document(self):
        text = "paths: {}\ncomponents:\n  schemas:\n    Error: {type: string, enum: &v [a, *v]}\n"
        with pytest.raises(FormatError, match="cannot be compacted"):
            simplify(text, YamlParser())

    def test_list_document_is_empty(self):
        assert simplify("[]").output == '{"endpoints":[]}'

    def test_scalar_document_is_empty(self):
        assert simplify("just some words", YamlParser()).output == '{"endpoints":[]}'

    def test_non_ascii_kept(self):
        doc = '{"paths":{"/a":{"get":{"summary":"Liste des entrées"}}}}'
        assert "Liste des entrées" in simplify(doc).output


class TestCompactDocument:
    def test_petstore_yaml(self):
        text = (FIXTURES / "petstore.yaml").read_text(encoding="utf-8")
        result = json.loads(simplify(text, YamlParser()).output)

        assert result["host"] == "http://petstore.swagger.io/v1"
        assert result["sec"] == ["bearerAuth"]
        assert len(result["endpoints"]) == 3
        # Error is referenced under paths; Owner and Unused are not
        assert list(result["schemas"]) == ["Pets", "Error", "NewPet", "Pet"]
        assert result["schemas"]["Pet"] == {
            "type": "object",
            "required": ["id", "name"],
            "properties": {
                "integer(int64) id": True,
                "string name": True,
                "string tag": True,
                "status": {"type": "string", "enum": ["available", "pending", "sold"]},
                "owner": {"$ref": "Owner"},
            },
        }

    def test_key_order(self):
        text = (FIXTURES / "petstore.yaml").read_text(encoding="utf-8")
        result = json.loads(simplify(text, YamlParser()).output)
        assert list(result) == ["host", "sec", "endpoints", "schemas"]

    def test_swagger2_legacy_fields(self):
        text = (FIXTURES / "swagger2.json").read_text(encoding="utf-8")
        result = json.loads(simplify(text).output)
        assert result["host"] == "api.example.com"
        assert result["sec"] == ["api_key"]
        assert result["schemas"] == {
            "User": {"type": "object", "properties": {"integer(int64) id": True, "string email": True}}
        }

    def test_servers_preferred_over_host(self):
        compact = compact_document({"servers": [{"url": "https://a"}], "host": "b"})
        assert compact.host == "https://a"

    def test_empty_server_list_falls_back_to_host(self):
        assert compact_document({"servers": [], "host": "b"}).host == "b"

    def test_bare_document(self):
        compact = compact_document({"openapi": "3.0.0"})
        assert compact.model_dump(exclude_none=True) == {"endpoints": []}

    def test_empty_security_schemes_kept(self):
        assert compact_document({"components": {"securitySchemes": {}}}).sec == []

    def test_schemas_omitted_without_references(self):
        doc = {"paths": {}, "components": {"schemas": {"Thing": {"type": "object"}}}}
        assert compact_document(doc).schemas is None

    def test_only_referenced_schemas(self):
        doc = {
            "paths": {"/a": {"get": {"responses": {"200": {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/A"}}}}}}}},
            "components": {"schemas": {"A": {"type": "string"}, "B": {"type": "string"}}},
        }
        assert compact_document(doc).schemas == {"A": "string"}

    def test_custom_description_cap(self):
        doc = {"paths": {"/a": {"get": {"summary": "abcdefghij"}}}}
        compact = compact_document(doc, SimplifierConfig(max_description_length=4))
        assert compact.endpoints[0].desc == "abcd..."

    def test_yaml_dates_serialized(self):
        text = "paths:\n  /a:\n    get:\n      responses:\n        '200':\n          description: ok\ncomponents:\n  schemas:\n    Error:\n      type: string\n      enum: [2024-01-01]\n"
        result = json.loads(simplify(text, YamlParser()).output)
        assert result["schemas"]["Error"] == {"type": "string", "enum": ["2024-01-01"]}


class TestReductionPercent:
    def test_rounds_half_up(self):
        assert reduction_percent(200, 199) == 1  # 0.5%
        assert reduction_percent(8, 1) == 88  # 87.5%

    def test_negative_when_output_grows(self):
        assert reduction_percent(10, 20) == -100

    def test_zero_input(self):
        assert reduction_percent(0, 0) is None
