"""
TechCart storefront client.
"""
