"""
Real HTTP integration transports.

These transports communicate with the remote product catalog API via HTTP.

Important:
- Must implement the same TransportGateway interface as the mock transport
- Must return decoded response bodies and raise TransportError on failure

Switching:
The selection of mock vs real transport happens in src/api/dependencies.py only.
"""
