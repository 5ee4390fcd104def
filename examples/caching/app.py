"""Block caching -- cache hooks backed by a plain dict.

lineage ships no cache backend. ``get_cache`` and ``set_cache`` hooks plug
one in: a hit skips ``pre_render``, the block itself, ``post_render`` and
``set_cache``, while ``pre_call``/``post_call`` still run.

Run:
    python app.py
"""

from lineage import Template, render_sync

# Blocks worth caching; everything else renders every time.
CACHEABLE = frozenset({"sidebar"})

cache: dict[tuple[str, str], str] = {}
call_count = 0


def get_cache(lang, block_name, *_):
    if block_name in CACHEABLE:
        return cache.get((lang, block_name))
    return None


def set_cache(rendered, lang, block_name, *_):
    if block_name in CACHEABLE:
        cache[(lang, block_name)] = rendered


def sidebar(vars, local, hooks):
    """Simulate an expensive block that should be cached."""
    global call_count  # noqa: PLW0603
    call_count += 1
    return f"<aside>computed {call_count} time(s)</aside>"


async def dashboard(vars, local, hooks):
    return f"<h1>{vars('title')}</h1>{await hooks.block('sidebar')}<p>users: {vars('users')}</p>"


template = Template(name="dashboard", block={"main": dashboard, "sidebar": sidebar})
hooks = {"get_cache": get_cache, "set_cache": set_cache}

first_output = render_sync(template, {"title": "Dashboard", "users": 1200}, "en", hooks)
count_after_first = call_count

# Different data, but the cached sidebar wins
second_output = render_sync(template, {"title": "Dashboard", "users": 9999}, "en", hooks)
count_after_second = call_count

# Another language is another cache entry
german_output = render_sync(template, {"title": "Übersicht", "users": 5}, "de", hooks)
count_after_german = call_count


def main() -> None:
    print("=== First render ===")
    print(first_output)
    print(f"\nsidebar rendered {count_after_first} time(s)")

    print("\n=== Second render (cached sidebar) ===")
    print(second_output)
    print(f"\nsidebar rendered {count_after_second} time(s) total")

    print("\n=== German render (new cache entry) ===")
    print(german_output)


if __name__ == "__main__":
    main()
