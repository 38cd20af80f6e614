# pytest configuration

import pytest


@pytest.fixture
def graphql_file(tmp_path):
    """Factory writing GraphQL documents into temporary files."""

    def write(text: str, name: str = "query.graphql"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write
