"""Bare imports — serve a front-end project straight from its sources.

``frontend/src/main.js`` imports three packages by name, already
rewritten to ``/@modules/...`` URLs. modrelay answers each one from a
different tier:

- ``vue`` from the project's own ``node_modules`` (installed locally)
- ``tiny-emitter`` through the ``browser`` entry in its package.json
- ``debounce`` from the pre-bundled copy in ``node_modules/.modrelay``

A small middleware tags module responses with the tier that answered,
read back from the identifier cache.

Run:
    python app.py
"""

from pathlib import Path

from modrelay import App, AppConfig, Request
from modrelay.middleware import Next

FRONTEND_DIR = Path(__file__).parent / "frontend"

app = App(AppConfig(root=FRONTEND_DIR, debug=True))


async def source_header(request: Request, next: Next):
    """Add ``X-Module-Source`` naming the file a module request resolved to."""
    response = await next(request)
    prefix = app.config.module_prefix
    if request.path.startswith(prefix) and response.status == 200:
        file = app.module_cache.lookup_file(request.path[len(prefix) :])
        if file is not None:
            response = response.with_header(
                "X-Module-Source", file.relative_to(FRONTEND_DIR.resolve()).as_posix()
            )
    return response


app.add_middleware(source_header)


if __name__ == "__main__":
    app.run()
