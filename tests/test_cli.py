import json

from click.testing import CliRunner

from graphql_vars import version
from graphql_vars.cli import main

valid_document = """
query Foo($a: String) {
  ...FragA
}

fragment FragA on Query {
  field(a: $a)
}
"""

invalid_document = """
query Foo($a: String) {
  ...FragAB
}

fragment FragAB on Query {
  field(a: $a, b: $b)
}
"""


def describe_cli():
    def shows_version():
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert version in result.output

    def requires_files():
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 2

    def rejects_missing_files(tmp_path):
        result = CliRunner().invoke(main, [str(tmp_path / "missing.graphql")])
        assert result.exit_code == 2

    def succeeds_for_valid_documents(graphql_file):
        path = graphql_file(valid_document)
        result = CliRunner().invoke(main, [str(path)])
        assert result.exit_code == 0
        assert result.output == ""

    def reports_undefined_variables(graphql_file):
        path = graphql_file(invalid_document)
        result = CliRunner().invoke(main, [str(path)])
        assert result.exit_code == 1
        assert 'Variable "$b" is not defined by operation "Foo".' in result.output
        assert f"{path}:7:19" in result.output
        assert f"{path}:2:7" in result.output

    def reports_errors_as_json(graphql_file):
        valid_path = graphql_file(valid_document, "valid.graphql")
        invalid_path = graphql_file(invalid_document, "invalid.graphql")
        result = CliRunner().invoke(
            main, ["--json", str(valid_path), str(invalid_path)]
        )
        assert result.exit_code == 1
        assert json.loads(result.output) == {
            str(valid_path): [],
            str(invalid_path): [
                {
                    "message": 'Variable "$b" is not defined by operation "Foo".',
                    "locations": [
                        {"line": 7, "column": 19},
                        {"line": 2, "column": 7},
                    ],
                }
            ],
        }

    def limits_number_of_errors(graphql_file):
        path = graphql_file("{ field(a: $a, b: $b, c: $c) }")
        result = CliRunner().invoke(main, ["--json", "--max-errors", "1", str(path)])
        assert result.exit_code == 1
        messages = [error["message"] for error in json.loads(result.output)[str(path)]]
        assert messages == [
            'Variable "$a" is not defined.',
            "Too many validation errors, error limit reached. Validation aborted.",
        ]

    def rejects_negative_max_errors(graphql_file):
        path = graphql_file(valid_document)
        result = CliRunner().invoke(main, ["--max-errors", "-1", str(path)])
        assert result.exit_code == 2

    def reports_syntax_errors(graphql_file):
        broken_path = graphql_file("query Foo {", "broken.graphql")
        invalid_path = graphql_file(invalid_document, "invalid.graphql")
        result = CliRunner().invoke(main, [str(broken_path), str(invalid_path)])
        assert result.exit_code == 2
        assert "Syntax Error" in result.output
        assert 'Variable "$b" is not defined' in result.output

    def checks_deep_fragment_chains(graphql_file):
        fragments = "\n".join(
            f"fragment F{i} on Query {{ field(a: $a{i}) {{ ...F{i + 1} }} }}"
            for i in range(1200)
        )
        path = graphql_file(f"query Deep {{ ...F0 }}\n{fragments}")
        result = CliRunner().invoke(main, ["--json", str(path)])
        assert result.exit_code == 1
        errors = json.loads(result.output)[str(path)]
        assert len(errors) == 1200
        assert errors[-1]["message"] == (
            'Variable "$a1199" is not defined by operation "Deep".'
        )
