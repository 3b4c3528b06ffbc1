"""
Storefront API: catalog, accounts and back-office for the storefront web client.
"""
__version__ = "1.0.0"
