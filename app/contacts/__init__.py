"""
Contact registry.

Per-owner address book entries that give another user a custom display
name. Contacts are private to their owner.
"""
