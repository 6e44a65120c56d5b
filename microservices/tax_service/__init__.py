"""
Tax Service

Sales tax calculation and tax ledger for the isA platform.

Features:
- Tax calculation through TaxJar, then Avalara, then a static state-rate table
- Fixed confidence score per answer path
- Tax liability and collected-tax ledger per jurisdiction
- Collected vs liability reports
- Event publishing for calculations and ledger writes
"""

__version__ = "1.0.0"
