"""Async blocks -- data fetched concurrently while rendering.

Blocks and hooks may be coroutines. ``hooks.iterate`` starts one block
render per item without waiting for the previous one, and joins the results
in input order no matter which finishes first.

Run:
    python app.py
"""

import asyncio
import time

from lineage import Template, render

FETCH_DELAY = 0.05


async def fetch_price(sku: str) -> str:
    """Pretend to call a pricing service."""
    await asyncio.sleep(FETCH_DELAY)
    return f"${len(sku) * 3}.00"


async def product_row(vars, local, hooks):
    price = await fetch_price(vars("sku"))
    return f"<tr><td>{local.index + 1}</td><td>{vars('sku')}</td><td>{price}</td></tr>"


async def table(vars, local, hooks):
    rows = await hooks.iterate("row", vars("products"), "\n")
    return f"<table>\n{rows}\n</table>"


template = Template(name="products", block={"main": table, "row": product_row})
products = [{"sku": sku} for sku in ("apple", "kiwi", "banana", "fig", "cherry")]


async def render_products() -> tuple[str, float]:
    start = time.perf_counter()
    html = await render(template, {"products": products})
    return html, time.perf_counter() - start


output, elapsed = asyncio.run(render_products())


def main() -> None:
    print(output)
    print(f"\n{len(products)} rows in {elapsed:.3f}s (each row waits {FETCH_DELAY}s)")


if __name__ == "__main__":
    main()
