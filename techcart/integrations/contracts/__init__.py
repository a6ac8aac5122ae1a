"""
Contracts (data models).

This folder defines the request/response shapes exchanged with the
storefront backend:
- Product and Category reference data
- CatalogQuery filter state and CartRequest bodies
- ActionResult, the outcome of cart and auth operations

Both mock and real HTTP clients should use these contracts.
"""
