"""Command-line interface for the Danish VAT return.

Usage:
    skatmoms report [--source URL|FILE] [--from DATE] [--to DATE]
    skatmoms report --labels danish
    skatmoms report --json
    skatmoms validate [--source URL|FILE] [--from DATE] [--to DATE]
"""
