"""
Exit codes for pomo-cli.

Typer/Click usage errors (unknown flags, non-integer ``-s``) keep Click's own
exit code 2.
"""

# Normal quit, or --help
SUCCESS = 0

# A duration or session count supplied on the command line is invalid
ERROR_INVALID_FLAGS = 1
