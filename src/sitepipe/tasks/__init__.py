"""Build task modules live here.

Each module declares its tasks with `@task(name=..., deps=[...], inputs=[...], outputs=[...])`
or, for pure aggregates, a module-level `alias(...)`. The CLI discovers them by importing
every module in this package.

Do not implement logic here unless it's shared helpers; keep tasks modular per file.
"""
