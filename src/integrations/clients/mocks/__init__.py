"""
Mock integration transports.

These transports return fake (but realistic) catalog responses without calling any external API.
They are used when:
- No catalog API URL is configured
- We want to exercise the store end-to-end without network access

Important:
- Mock transports must follow the SAME interface as the real HTTP transport (TransportGateway).
- Responses must use the same wire shapes as the remote catalog API.

Switching to real:
Set INTEGRATIONS_MODE=real (or CATALOG_API_URL) and src/api/dependencies.py wires
clients/real_http/http_transport.py instead.
"""
