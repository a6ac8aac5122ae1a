"""
Real HTTP integration clients.

These clients communicate with the storefront backend over HTTP.

Important:
- Must implement the same interface as the mock client
- Must return data shaped according to techcart/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in techcart/dependencies.py only.
"""
