"""Tests for the error handling example."""


class TestErrorHandlingApp:
    """Verify on_error substitution and error annotation."""

    def test_on_error_replaces_failed_block(self, example_app) -> None:
        assert example_app.handled_output == (
            "<header>Home</header><!-- widget failed: weather service unavailable -->"
        )

    def test_unhandled_error_names_blocks(self, example_app) -> None:
        error = example_app.unhandled_error
        assert error is not None
        assert str(error) == "main has thrown: widget has thrown: weather service unavailable"
        assert error.block_path == ["main", "widget"]
        assert isinstance(error.original, ConnectionError)

    def test_compact_format_lists_blocks(self, example_app) -> None:
        from lineage.environment.terminal import strip_colors

        text = strip_colors(example_app.unhandled_error.format_compact())
        assert text.splitlines()[0].startswith("L-RUN-004: main has thrown")
        assert "Blocks: main -> widget" in text
