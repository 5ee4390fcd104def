"""Layout inheritance -- a base layout, a section layout and a page.

The base defines the document skeleton and default blocks. The section
overrides the navigation and wraps the base's content through
``local.parent()``. The page only fills in the content and a title default.

Run:
    python app.py
"""

from lineage import Template, render_sync


async def document(vars, local, hooks):
    return (
        "<!doctype html>\n"
        f'<html lang="{await local.trans("lang")}">\n'
        f"<head><title>{vars('title')}</title>{await hooks.block('head')}</head>\n"
        "<body>\n"
        f"{await hooks.block('nav')}\n"
        f"<main>{await hooks.block('content')}</main>\n"
        "</body>\n"
        "</html>"
    )


base = Template(
    name="base",
    block={
        "main": document,
        "head": lambda vars, local, hooks: "",
        "nav": lambda vars, local, hooks: "<nav></nav>",
        "content": lambda vars, local, hooks: "<p>Nothing here yet.</p>",
    },
    vars={"title": "Untitled"},
)


async def section_nav(vars, local, hooks):
    links = await hooks.iterate("nav_link", vars("links"), "")
    return f"<nav>{links}</nav>"


async def section_content(vars, local, hooks):
    return f"<section>{await local.parent()}</section>"


section = Template(
    name="docs-section",
    parent=base,
    block={
        "nav": section_nav,
        "nav_link": lambda vars, local, hooks: (
            f'<a href="{vars("href")}">{local.index + 1}. {vars("label")}</a>'
        ),
        "content": section_content,
    },
)

page = Template(
    name="install-page",
    parent=section,
    block={
        "content": lambda vars, local, hooks: f"<h1>{vars('title')}</h1><p>{vars('body')}</p>",
    },
    vars={"title": "Installation"},
)

variables = {
    "links": [
        {"href": "/docs/", "label": "Overview"},
        {"href": "/docs/install/", "label": "Install"},
    ],
    "body": "pip install lineage-templates",
}

hooks = {"trans": lambda item, category, lang, *_: lang if item == "lang" else None}

section_output = render_sync(section, variables, "en", hooks)
page_output = render_sync(page, variables, "en", hooks)


def main() -> None:
    print("=== Section (inherits content from base) ===")
    print(section_output)
    print()
    print("=== Page (overrides content) ===")
    print(page_output)


if __name__ == "__main__":
    main()
