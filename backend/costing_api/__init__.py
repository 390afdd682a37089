"""
Costing API: ingredient price ledger, price cache and recipe costing.
"""
