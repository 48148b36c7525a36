"""Headerscope - SAP CPI integration-flow header extraction.

Extracts the header tables embedded in integration-flow call activities,
resolves ``{{placeholder}}`` values against ``parameters.prop`` and
reports the result as a console summary or an Excel workbook.
"""

__version__ = "1.0.0"
