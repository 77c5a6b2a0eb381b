"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (SQLite repositories)
- Discord (bot, cogs)
- Monitoring (ledger event subscribers)
"""
