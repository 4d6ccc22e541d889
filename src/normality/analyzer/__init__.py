"""Analyzer subpackage exports."""

from .array import ArrayAnalyzer
from .channels import ChannelAnalyzer
from .dataframe import DataFrameAnalyzer

__all__ = ["ArrayAnalyzer", "ChannelAnalyzer", "DataFrameAnalyzer"]
