"""
Analysis Engine Module

Statistics over time-indexed datasets:
- Date range filtering and parameter extraction
- Descriptive statistics (mean, median, population std, min, max, anomalies)
- Trailing moving averages
- Pearson correlation with qualitative interpretation
"""

__version__ = "0.1.0"
