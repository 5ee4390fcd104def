"""Error handling -- on_error hooks and annotated errors.

A block that raises can be replaced by the ``on_error`` hook's output at
that block's boundary. Without a handler the error climbs out of the render
as ``BlockRenderError``, annotated with every block it passed through.

Run:
    python app.py
"""

from lineage import BlockRenderError, Template, render_sync


def weather(vars, local, hooks):
    raise ConnectionError("weather service unavailable")


async def page(vars, local, hooks):
    return f"<header>{vars('title')}</header>{await hooks.block('widget')}"


template = Template(
    name="home",
    block={"main": page, "widget": weather},
    vars={"title": "Home"},
)


def on_error(error, lang, block_name, *_):
    return f"<!-- {block_name} failed: {error} -->"


handled_output = render_sync(template, hooks={"on_error": on_error})

try:
    render_sync(template)
except BlockRenderError as e:
    unhandled_error = e
else:
    unhandled_error = None


def main() -> None:
    print("=== With on_error ===")
    print(handled_output)
    print()
    print("=== Without on_error ===")
    assert unhandled_error is not None
    print(unhandled_error.format_compact())
    print(f"  Cause: {unhandled_error.original!r}")


if __name__ == "__main__":
    main()
