"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- No storefront backend is reachable
- We want to exercise the controllers end-to-end without network access

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped according to techcart/integrations/contracts/*
"""
