"""Tests for the hello example."""

from lineage import render_sync


class TestHelloApp:
    """Verify the hello example renders correctly."""

    def test_output(self, example_app) -> None:
        assert example_app.output == "Hello, World!"

    def test_rerender_with_different_variables(self, example_app) -> None:
        result = render_sync(example_app.template, {"name": "Lineage"})
        assert result == "Hello, Lineage!"
