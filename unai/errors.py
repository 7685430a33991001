"""Exceptions raised outside the finding engine, and the CLI exit codes they map to.

0  = success (no findings, or findings fixed)
1  = I/O error
2  = config or rule-category error
10 = findings present and ``--fail`` requested
"""

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_FINDINGS = 10


class UnaiError(Exception):
    exit_code = EXIT_IO_ERROR


class InputError(UnaiError):
    """File or stdin could not be read (missing, too large, not UTF-8)."""


class OutputError(UnaiError):
    """Output could not be written."""


class ConfigError(UnaiError):
    exit_code = EXIT_CONFIG_ERROR


class InvalidRuleError(UnaiError):
    exit_code = EXIT_CONFIG_ERROR
