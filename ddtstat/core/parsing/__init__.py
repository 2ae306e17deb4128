from .report_parser import DdtReportParser, parse_report, TOTALS_COLUMNS

__all__ = ['DdtReportParser', 'parse_report', 'TOTALS_COLUMNS']
