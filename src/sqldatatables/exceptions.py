class DataTablesError(Exception):
    """Base class for every error raised while serving a DataTables request."""


class ConfigurationError(DataTablesError):
    """The table, columns or clauses handed to DataTables are unusable."""


class InvalidColumnError(DataTablesError):
    """The request references a column index outside the configured columns."""


class StructuralQueryError(DataTablesError):
    """
    The total or filtered count query failed.

    A response cannot be built without both counts, so this aborts the request.
    """
