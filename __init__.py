"""skatmoms: Danish VAT (moms) return boxes from an invoice ledger."""

__version__ = "0.1.0"
