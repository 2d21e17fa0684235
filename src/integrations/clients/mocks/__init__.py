"""
Simulated integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- MTN API credentials are not configured (development mode)
- The provider has no real API wired up yet (Telecel)

Important:
- Simulated clients must follow the SAME interface as real HTTP clients
  (src/integrations/contracts/interfaces.py::MobileMoneyProvider).
- Every simulated MTN result is flagged with development_mode=True.
"""
