"""
Contracts (data models).

This folder defines the request/response shapes shared by every mobile money
client: payment requests, initiations, status results, access tokens, and the
phone number / status rules for Ghana providers.

Both the simulated and the real HTTP clients return these types, so the
service and API layers never deal with raw provider payloads.
"""
