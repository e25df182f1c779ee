"""
Contracts (data models).

This folder defines the request/response shapes for the remote catalog API, e.g.:
- Product records and paged list results
- create / partial update request bodies
- soft-delete acknowledgements
- the transport gateway interface and its error type

Why this exists:
- Ensures consistent data structures across mock and real transports
- Prevents “guessing” payload formats in multiple places
- Makes integration safer: the store relies on stable models, not on ad-hoc dicts

Both mock and real HTTP transports should be used through these contracts.
"""
