"""Specifiers the host bundler leaves unbundled."""

from __future__ import annotations

from typing import Final

NODE_BUILTINS: Final[frozenset[str]] = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

DEFAULT_EXTRA_EXTERNALS: Final[tuple[str, ...]] = ("less", "@swc/core")


def is_builtin(specifier: str) -> bool:
    """Return True for Node.js builtins, with or without 'node:' and subpaths."""
    bare = specifier.removeprefix("node:")
    if not bare:
        return False
    return bare.split("/", 1)[0] in NODE_BUILTINS


def is_external(specifier: str, extra: tuple[str, ...] = DEFAULT_EXTRA_EXTERNALS) -> bool:
    """Return True when the host should not bundle the specifier."""
    if is_builtin(specifier):
        return True
    return specifier in extra
