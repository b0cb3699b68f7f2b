"""
Bets Gateway - aggregation front for bet submissions

Responsibilities:
- Accept bet submissions over HTTP
- Fetch match, player and championship data from upstream services
- Forward auth and tracing headers to every upstream call
- Assemble the composite bet response
"""
