"""
Ledger desk: user balances changed only through administrator-reviewed
deposit and withdrawal requests.
"""
