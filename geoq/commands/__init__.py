"""Implementations behind the ``geoq`` subcommands.

Each function takes an iterable of entities and yields output lines, so
the command line layer only wires STDIN to STDOUT.
"""
