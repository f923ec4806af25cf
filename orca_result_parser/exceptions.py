class OrcaParserError(Exception):
    """Base class for errors raised by orca_result_parser."""


class OrcaReadError(OrcaParserError):
    """An input file could not be read. Aborts the whole multi-file parse."""

    def __init__(self, path, cause=None):
        self.path = path
        self.cause = cause
        msg = f"Could not read file: {path}"
        if cause is not None:
            msg += f" ({cause})"
        super().__init__(msg)


class BondParameterError(OrcaParserError):
    """A bond parameter overlay file is malformed."""
