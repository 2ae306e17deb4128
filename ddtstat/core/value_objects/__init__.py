"""Core value objects"""

from .size_value import SizeValue, parse_size_token
from .metric_request import MetricRequest, Subcommand, Unit

__all__ = ['SizeValue', 'parse_size_token', 'MetricRequest', 'Subcommand', 'Unit']
