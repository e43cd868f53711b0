"""
RugQC: AQL sampling, risk scoring and inspection report generation
for textile and rug manufacturers.
"""

__version__ = "1.0.0"
