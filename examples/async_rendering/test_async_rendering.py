"""Tests for the async rendering example."""


class TestAsyncRenderingApp:
    """Verify rows render concurrently and stay in input order."""

    def test_rows_in_input_order(self, example_app) -> None:
        lines = example_app.output.splitlines()
        assert lines[0] == "<table>"
        assert lines[1] == "<tr><td>1</td><td>apple</td><td>$15.00</td></tr>"
        assert lines[-2] == "<tr><td>5</td><td>cherry</td><td>$18.00</td></tr>"
        assert lines[-1] == "</table>"

    def test_rows_fetched_concurrently(self, example_app) -> None:
        sequential = len(example_app.products) * example_app.FETCH_DELAY
        assert example_app.elapsed < sequential
