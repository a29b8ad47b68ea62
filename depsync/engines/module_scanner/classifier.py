"""Separate registry modules from Node built-ins and local files."""

from __future__ import annotations

from collections.abc import Iterable

# Node.js core modules (require('module').builtinModules).
NODE_BUILTIN_MODULES: frozenset[str] = frozenset(
    {
        "_http_agent",
        "_http_client",
        "_http_common",
        "_http_incoming",
        "_http_outgoing",
        "_http_server",
        "_stream_duplex",
        "_stream_passthrough",
        "_stream_readable",
        "_stream_transform",
        "_stream_wrap",
        "_stream_writable",
        "_tls_common",
        "_tls_wrap",
        "assert",
        "assert/strict",
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
        "dns/promises",
        "domain",
        "events",
        "fs",
        "fs/promises",
        "http",
        "http2",
        "https",
        "inspector",
        "inspector/promises",
        "module",
        "net",
        "os",
        "path",
        "path/posix",
        "path/win32",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "readline/promises",
        "repl",
        "stream",
        "stream/consumers",
        "stream/promises",
        "stream/web",
        "string_decoder",
        "sys",
        "timers",
        "timers/promises",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "util/types",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

# Only reachable through the ``node:`` scheme.
_NODE_SCHEME_ONLY: frozenset[str] = frozenset({"sea", "sqlite", "test", "test/reporters"})

_LOCAL_PREFIXES = ("./", "../", "/")


def is_builtin_module(name: str) -> bool:
    if name.startswith("node:"):
        bare = name[len("node:") :]
        return bare in NODE_BUILTIN_MODULES or bare in _NODE_SCHEME_ONLY
    return name in NODE_BUILTIN_MODULES


def is_local_reference(name: str) -> bool:
    return name.startswith(_LOCAL_PREFIXES) or name in (".", "..")


def filter_registry_modules(names: Iterable[str]) -> list[str]:
    """Drop built-ins and local paths, keeping input order."""
    return [n for n in names if not is_builtin_module(n) and not is_local_reference(n)]
