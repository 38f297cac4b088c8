"""CSV -> nested record importer.

Converts CSV files whose header row uses dot-notation property paths
(``name.firstName``, ``address.city``) into nested, typed records.
"""

__version__ = "0.1.0"
