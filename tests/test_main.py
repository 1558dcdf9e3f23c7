import json

import yaml

from param_tree.main import load_document, main, parameter_section
from tests.samples import SCENARIO_CLEANED, SCENARIO_PARAMETERS


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return str(path)


class TestCleanCommand:
    """Test the 'clean' command"""

    def test_prints_json(self, tmp_path, capsys):
        params_file = write_yaml(tmp_path / "params.yaml", SCENARIO_PARAMETERS)

        exit_code = main(["clean", params_file, "--format", "json"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == SCENARIO_CLEANED

    def test_reads_body_parameters_section_from_json(self, tmp_path, capsys):
        params_file = tmp_path / "endpoint.json"
        params_file.write_text(json.dumps({"body_parameters": SCENARIO_PARAMETERS}), encoding="utf-8")

        exit_code = main(["clean", str(params_file), "--format", "query"])

        assert exit_code == 0
        assert capsys.readouterr().out.startswith("object%5Bkey1%5D=43")

    def test_output_format_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PARAM_TREE_OUTPUT_FORMAT", "yaml")
        params_file = write_yaml(tmp_path / "params.yaml", SCENARIO_PARAMETERS)
        output = tmp_path / "out" / "body.yaml"

        exit_code = main(["clean", params_file, "--output", str(output)])

        assert exit_code == 0
        assert yaml.safe_load(output.read_text(encoding="utf-8")) == SCENARIO_CLEANED

    def test_seed_makes_output_stable(self, tmp_path, capsys):
        params_file = write_yaml(tmp_path / "params.yaml", {"room_id": {"type": "string"}})

        main(["clean", params_file, "--seed", "7"])
        first = capsys.readouterr().out
        main(["clean", params_file, "--seed", "7"])
        second = capsys.readouterr().out

        assert first == second

    def test_strict_error(self, tmp_path, capsys):
        params_file = write_yaml(tmp_path / "params.yaml", {
            "name": {"type": "string", "example": "x"},
            "name.first": {"type": "string", "example": "y"},
        })

        assert main(["clean", params_file, "--strict"]) == 2
        assert "name.first" in capsys.readouterr().err

    def test_parameter_that_is_not_a_mapping(self, tmp_path, capsys):
        params_file = tmp_path / "params.yaml"
        params_file.write_text("name: string\n", encoding="utf-8")

        assert main(["clean", str(params_file)]) == 2
        assert "'name' must be a mapping" in capsys.readouterr().err

    def test_parameter_section_that_is_a_list(self, tmp_path, capsys):
        params_file = tmp_path / "params.yaml"
        params_file.write_text("body_parameters:\n  - name: x\n", encoding="utf-8")

        assert main(["clean", str(params_file)]) == 2
        assert "body_parameters must be a mapping" in capsys.readouterr().err

    def test_invalid_output_format_setting(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("PARAM_TREE_OUTPUT_FORMAT", "xml")
        params_file = write_yaml(tmp_path / "params.yaml", SCENARIO_PARAMETERS)

        assert main(["clean", params_file]) == 2
        assert "PARAM_TREE_OUTPUT_FORMAT" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["clean", str(tmp_path / "nope.yaml")]) == 2
        assert "Cannot read" in capsys.readouterr().err


class TestOpenapiCommand:

    def test_writes_spec(self, tmp_path):
        endpoints_file = write_yaml(tmp_path / "endpoints.yaml", {
            "endpoints": [
                {
                    "path": "/api/users",
                    "method": "POST",
                    "summary": "Create a user",
                    "body_parameters": SCENARIO_PARAMETERS,
                },
            ],
        })
        output = tmp_path / "openapi.yaml"

        exit_code = main(["openapi", endpoints_file, "--output", str(output), "--title", "Users"])

        assert exit_code == 0
        spec = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert spec["info"]["title"] == "Users"
        body = spec["paths"]["/api/users"]["post"]["requestBody"]
        assert body["content"]["application/json"]["example"] == SCENARIO_CLEANED

    def test_endpoint_without_path(self, tmp_path, capsys):
        endpoints_file = write_yaml(tmp_path / "endpoints.yaml", {"endpoints": [{"method": "GET"}]})

        assert main(["openapi", endpoints_file]) == 2
        assert "endpoints[0]" in capsys.readouterr().err

    def test_default_output_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PARAM_TREE_OUTPUT_DIR", str(tmp_path / "docs"))
        endpoints_file = write_yaml(tmp_path / "endpoints.yaml", {"endpoints": [{"path": "/health"}]})

        assert main(["openapi", endpoints_file]) == 0
        assert (tmp_path / "docs" / "openapi.yaml").exists()


class TestValidateCommand:

    def test_valid(self, tmp_path, capsys):
        params_file = write_yaml(tmp_path / "params.yaml", SCENARIO_PARAMETERS)

        assert main(["validate", params_file]) == 0
        assert "match" in capsys.readouterr().out

    def test_invalid(self, tmp_path, capsys):
        params_file = write_yaml(tmp_path / "params.yaml", {"ids": {"type": "integer[]", "example": ["a"]}})

        assert main(["validate", params_file]) == 1
        assert "ids.0" in capsys.readouterr().out


class TestInputHelpers:

    def test_parameter_section(self):
        assert parameter_section({"query_parameters": {"a": {}}}) == {"a": {}}
        assert parameter_section({"parameters": None}) == {}
        assert parameter_section({"a": {}}) == {"a": {}}

    def test_empty_document(self, tmp_path):
        empty = tmp_path / "empty.yaml"
        empty.write_text("", encoding="utf-8")

        assert load_document(str(empty)) == {}
