class TableBrowserError(Exception):
    """Base exception for all table_browser errors"""
    pass

class ConfigError(TableBrowserError):
    """Invalid or inconsistent global.json / table config"""
    pass

class DatasetSchemaError(TableBrowserError):
    """
    Column data doesn't match what Dataset expects
    non-string column ids, unsupported cell types, etc
    """
    pass

class UnknownColumnError(TableBrowserError, KeyError):
    """A column id was requested that the Dataset does not define"""
    pass

class ExportError(TableBrowserError):
    """A sink (CSV, spreadsheet, PDF, clipboard) could not produce its payload"""
    pass
