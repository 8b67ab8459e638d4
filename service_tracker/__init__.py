"""Service Tracker - service hour ledger, weekly goals and Excel export"""

__version__ = "0.1.0"
