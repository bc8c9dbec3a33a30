"""
==========
Exceptions
==========

Module containing package-wide exception definitions. Exceptions for
particular subsystems are defined in their respective modules.

"""


class MWCError(Exception):
    """Generic exception raised for errors in ``mwcrandom``."""

    pass
