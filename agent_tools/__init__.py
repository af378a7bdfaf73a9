"""Command-line scripts for Stacks contract calls, Jing swaps and rune etching."""

__version__ = "0.1.0"
