"""Hello World -- the simplest lineage example.

One template, one block, render variables looked up through ``vars``.

Run:
    python app.py
"""

from lineage import Template, render_sync

template = Template(
    name="hello",
    block={"main": lambda vars, local, hooks: f"Hello, {vars('name')}!"},
)

output = render_sync(template, {"name": "World"})


def main() -> None:
    print(output)
    print()

    # Multiple renders with different variables
    for name in ["Lineage", "Blocks", "Python"]:
        print(render_sync(template, {"name": name}))


if __name__ == "__main__":
    main()
