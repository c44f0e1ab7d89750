"""
Bathlance Test Suite

Tests are organized by service:
- Date arithmetic and instant parsing
- Expiry computation and status
- Session reminders and restock intents
- Replacement transition and product editing
- Configuration, logging and the CLI adapter
"""
