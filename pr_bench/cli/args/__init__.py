"""CLI argument builder modules.

The entrypoint :mod:`pr_bench.cli.main` is intentionally kept thin. Flags are
registered via small "arg builder" functions housed here:

- :func:`pr_bench.cli.args.base.add_base_args`
"""

from __future__ import annotations

__all__ = [
    "base",
]
