"""
Storefront API
"""
