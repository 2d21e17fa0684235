"""
Real HTTP integration clients.

These clients communicate with the MTN MoMo Collections API over HTTP.

Important:
- Must implement the same interface as the simulated clients
- Must return data shaped according to src/integrations/contracts/*

Switching:
The selection of simulated vs real clients happens in PaymentService only.
"""
