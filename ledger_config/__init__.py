"""
ledger_config — access-controlled config updates and weighted fee distribution
for transactional ledger programs.
"""

__version__ = "0.1.0"
