"""Thread-based synchronisation primitives, containers, parallel algorithms, thread pools and benchmarks."""

__version__ = "0.1.0"

__all__ = [
    "accounts",
    "cli",
    "hashtable",
    "interruptible",
    "matrix",
    "pools",
    "queues",
    "scan",
    "search",
    "sequences",
    "sorting",
    "stacks",
    "sync",
    "timing",
]